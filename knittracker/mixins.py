from typing import Any, ClassVar


class ImmutableFieldsMixin:
    """
    Mixin that lets the named attributes be assigned exactly once.

    The first assignment (normally from ``__init__``) goes through; any later
    assignment raises :class:`AttributeError`.  :func:`copy.deepcopy` restores
    instance state without calling ``__setattr__``, so snapshots still work.
    """

    #: Attributes that may only be set once.
    IMMUTABLE_FIELDS: ClassVar[tuple[str, ...]] = ()

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self.IMMUTABLE_FIELDS and name in self.__dict__:
            msg = f"{type(self).__name__}.{name} cannot be changed once set"
            raise AttributeError(msg)
        super().__setattr__(name, value)
