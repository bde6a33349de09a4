from __future__ import annotations


class NilType:
    """The empty-sequence marker.

    Nil is the only falsy atom and is structurally equal to the empty
    proper list, so `Nil == []` and `[] == Nil` both hold.
    """

    __slots__ = ()

    def __repr__(self): return "nil"
    def __bool__(self): return False

    def __eq__(self, other):
        return isinstance(other, NilType) or (isinstance(other, list) and not other)

    def __hash__(self):
        return hash(())

    def __iter__(self):
        return iter(())

    def __len__(self):
        return 0


Nil = NilType()
