import socket

MAX_NAME_LENGTH = 255
"Longest accepted name, in UTF-8 bytes. Matches the POSIX host name buffer."


class NameUnavailable(Exception):
    """
    The OS did not provide a name, or it could not be turned into text.
    """


def get_hostname() -> str:
    """Get the hostname of the system."""
    return socket.gethostname()


def to_text(value: str | bytes | None) -> str:
    """
    Convert a raw name into printable text.

    Bytes are decoded as UTF-8. Empty values, undecodable values, values
    containing NUL and values longer than :const:`MAX_NAME_LENGTH` bytes
    raise :class:`NameUnavailable`.

    :param value: Name as returned by the platform.
    """

    match value:
        case None | "" | b"":
            raise NameUnavailable("No name returned")
        case bytes():
            raw = value
            try:
                text = value.decode("utf-8")
            except UnicodeDecodeError as e:
                raise NameUnavailable(f"Name is not valid UTF-8: {e}") from e
        case str():
            text = value
            try:
                raw = value.encode("utf-8")
            except UnicodeEncodeError as e:
                raise NameUnavailable(f"Name is not representable as UTF-8: {e}") from e
        case _:
            raise TypeError(f"Unsupported name type {type(value)!r}")

    if "\x00" in text:
        raise NameUnavailable("Name contains a NUL character")

    if len(raw) > MAX_NAME_LENGTH:
        raise NameUnavailable(f"Name is {len(raw)} bytes, limit is {MAX_NAME_LENGTH}")

    return text
