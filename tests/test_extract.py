from __future__ import annotations

from stutterlint.extract import iter_symbols
from stutterlint.models import KIND_FUNCTION, KIND_METHOD, KIND_TYPE, KIND_VALUE
from stutterlint.parser import GoParser


SAMPLE = """package shapes

import (
	"fmt"
	"strings"
)

const (
	MaxSides, MinSides = 12, 3
	defaultName        = "shape"
)

var ShapeCount int

type Shape interface {
	Area() float64
}

type (
	Square struct{ side float64 }
	Alias  = Square
)

func NewSquare(side float64) *Square {
	var scratch strings.Builder
	fmt.Fprint(&scratch, side)
	return &Square{side: side}
}

func (s *Square) Area() float64 {
	area := s.side * s.side
	return area
}
"""


def _symbols(source: str, package: str = "shapes", tab_width: int = 8):
    parsed = GoParser().parse_text(source, path="shapes.go")
    return list(iter_symbols(parsed, package, tab_width=tab_width))


def test_extracts_declarations_in_source_order():
    symbols = _symbols(SAMPLE)

    assert [(sym.kind, sym.name) for sym in symbols] == [
        (KIND_VALUE, "MaxSides"),
        (KIND_VALUE, "MinSides"),
        (KIND_VALUE, "defaultName"),
        (KIND_VALUE, "ShapeCount"),
        (KIND_TYPE, "Shape"),
        (KIND_TYPE, "Square"),
        (KIND_TYPE, "Alias"),
        (KIND_FUNCTION, "NewSquare"),
        (KIND_VALUE, "scratch"),
        (KIND_METHOD, "Area"),
    ]
    assert all(sym.package == "shapes" for sym in symbols)


def test_positions_point_at_func_keyword_and_names():
    symbols = {sym.name: sym for sym in _symbols(SAMPLE)}

    assert str(symbols["ShapeCount"].position) == "shapes.go:13:5"
    assert str(symbols["Shape"].position) == "shapes.go:15:6"
    assert str(symbols["NewSquare"].position) == "shapes.go:24:1"
    assert symbols["MinSides"].position.column > symbols["MaxSides"].position.column


def test_columns_expand_tabs():
    source = "package geo\n\nfunc f() {\n\tvar GeoInner int\n\t_ = GeoInner\n}\n"

    wide = {sym.name: sym for sym in _symbols(source, package="geo")}
    narrow = {sym.name: sym for sym in _symbols(source, package="geo", tab_width=1)}

    assert wide["GeoInner"].position.line == 4
    assert wide["GeoInner"].position.column == 13
    assert narrow["GeoInner"].position.column == 6


def test_columns_count_characters_not_bytes():
    source = 'package geo\n\nvar é, GeoX = 1, 2\n'
    symbols = {sym.name: sym for sym in _symbols(source, package="geo")}

    assert symbols["é"].position.column == 5
    assert symbols["GeoX"].position.column == 8
