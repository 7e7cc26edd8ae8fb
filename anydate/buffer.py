from __future__ import annotations


class CharBuffer:
    """Mutable sequence of characters owned by a single scan attempt."""

    def __init__(self, text: str) -> None:
        self._chars = list(text)

    def __len__(self) -> int:
        return len(self._chars)

    def __getitem__(self, pos: int) -> str:
        return self._chars[pos]

    def __str__(self) -> str:
        return "".join(self._chars)

    def __repr__(self) -> str:
        return f"CharBuffer({str(self)!r})"

    def slice(self, pos: int, length: int) -> str:
        return "".join(self._chars[pos : pos + length])

    def next_char_is(self, pos: int, *options: str) -> bool:
        nxt = pos + 1
        return nxt < len(self._chars) and self._chars[nxt] in options

    def remove_range(self, pos: int, count: int) -> None:
        del self._chars[pos : pos + count]

    def drop_prefix(self, count: int) -> None:
        """Drop the first `count` chars plus any whitespace that follows them."""
        del self._chars[:count]
        while self._chars and self._chars[0].isspace():
            del self._chars[0]
