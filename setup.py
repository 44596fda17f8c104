import os

from setuptools import setup, find_packages

version_file = os.path.join(os.path.dirname(__file__), "pegcomb", "version.py",)
with open(version_file, "r") as f:
    exec(f.read())

setup(
    name="pegcomb",
    version=__version__,  # noqa: F821
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    description="An embeddable PEG-style grammar combinator and backtracking parser.",
    license="GPLv2",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v2 (GPLv2)",
        "Operating System :: POSIX :: Linux",
        "Operating System :: Microsoft :: Windows",
        "Operating System :: MacOS",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.7",
    ],
    keywords="PEG parser combinator grammar",
    python_requires=">=3.7",
    extras_require={"test": ["pytest"], "docs": ["sphinx", "numpydoc"]},
    entry_points={"console_scripts": []},
)
