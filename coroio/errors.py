class UseAfterCompletion(RuntimeError):
    """A suspended computation was used outside of its contract."""


class Reentered(UseAfterCompletion):
    """A computation was resumed while a segment of it was already running."""


class Released(UseAfterCompletion):
    """The handle has been released or its ownership transferred."""


class AlreadyConsumed(UseAfterCompletion):
    """A single-use suspension point or resumption was used again."""
