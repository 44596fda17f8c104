from pegcomb import __all__ as pegcomb_all

from pegcomb.expressions import __all__ as expressions_all
from pegcomb.source import __all__ as source_all
from pegcomb.parser import __all__ as parser_all
from pegcomb.visitor import __all__ as visitor_all
from pegcomb.rule import __all__ as rule_all
from pegcomb.export import __all__ as export_all


def test_all_is_complete() -> None:
    assert sorted(pegcomb_all) == sorted(
        expressions_all + source_all + parser_all + visitor_all + rule_all + export_all
    )
