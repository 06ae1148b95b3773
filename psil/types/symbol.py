from __future__ import annotations


class Symbol:
    """A name read from Psil source.

    There is one Symbol object per name: `Symbol("fun") is Symbol("fun")`.
    `str()` gives the name exactly as written, which is what the printer emits
    and what the reader reads back.
    """

    __slots__ = ("id",)
    __match_args__ = ("id",)

    _table: dict[str, Symbol] = {}

    def __new__(cls, name: str) -> Symbol:
        symbol = cls._table.get(name)
        if symbol is None:
            symbol = super().__new__(cls)
            symbol.id = name
            cls._table[name] = symbol
        return symbol

    def __reduce__(self):
        return Symbol, (self.id,)

    def __repr__(self):
        return f"'{self.id}"

    def __str__(self):
        return self.id
