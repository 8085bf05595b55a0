"""A fixed-size array of bits used to track free and allocated resources."""

from __future__ import annotations

from typing import BinaryIO, Iterator

from .utility import div_round_up

BITS_IN_BYTE = 8
BITS_IN_WORD = 32
BYTES_IN_WORD = BITS_IN_WORD // BITS_IN_BYTE


class BitMap:
    """A set of ``nitems`` bits, each of which can be marked, cleared and tested.

    Storage is a whole number of 32-bit words; the serialized form is those
    words in little-endian order.
    """

    def __init__(self, nitems: int) -> None:
        if nitems < 0:
            raise ValueError(f"bitmap size must not be negative: {nitems}")
        self.num_bits = nitems
        self.num_words = div_round_up(nitems, BITS_IN_WORD)
        self._bits = 0

    def __len__(self) -> int:
        return self.num_bits

    def __iter__(self) -> Iterator[int]:
        """Yield the numbers of the bits that are set, in increasing order."""
        return (which for which in range(self.num_bits) if self._bits >> which & 1)

    def __str__(self) -> str:
        return "Bitmap set:\n" + "".join(f"{which}, " for which in self) + "\n"

    def _check(self, which: int) -> None:
        if not 0 <= which < self.num_bits:
            raise IndexError(f"bit {which} out of range 0..{self.num_bits - 1}")

    def mark(self, which: int) -> None:
        """Set bit ``which``."""
        self._check(which)
        self._bits |= 1 << which

    def clear(self, which: int) -> None:
        """Clear bit ``which``."""
        self._check(which)
        self._bits &= ~(1 << which)

    def test(self, which: int) -> bool:
        """Return True if bit ``which`` is set."""
        self._check(which)
        return bool(self._bits >> which & 1)

    def find(self) -> int | None:
        """Find the first clear bit, mark it and return its number.

        Returns None when every bit is set.
        """
        which = next(
            (i for i in range(self.num_bits) if not self._bits >> i & 1), None
        )
        if which is not None:
            self.mark(which)
        return which

    def num_clear(self) -> int:
        """Return how many bits are clear."""
        return sum(1 for i in range(self.num_bits) if not self._bits >> i & 1)

    def to_bytes(self) -> bytes:
        """Serialize the bitmap's words, little-endian."""
        return self._bits.to_bytes(self.num_words * BYTES_IN_WORD, "little")

    def from_bytes(self, data: bytes) -> None:
        """Replace the bitmap's contents with serialized words."""
        expected = self.num_words * BYTES_IN_WORD
        if len(data) != expected:
            raise ValueError(f"expected {expected} bytes of bitmap data, got {len(data)}")
        self._bits = int.from_bytes(data, "little")

    def fetch_from(self, file: BinaryIO) -> None:
        """Load the bitmap from the start of a binary file."""
        file.seek(0)
        self.from_bytes(file.read(self.num_words * BYTES_IN_WORD))

    def write_back(self, file: BinaryIO) -> None:
        """Store the bitmap at the start of a binary file."""
        file.seek(0)
        file.write(self.to_bytes())