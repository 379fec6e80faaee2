"""Encode a note as a Nano amount and decode it again."""

from __future__ import annotations

from nanote import new_engine


def main() -> None:
    nanote = new_engine()

    plaintext = "hello, world!"
    print(f"Plaintext: {plaintext}")

    encoded = nanote.encode(plaintext)
    print(f"Encoded: {encoded}")
    # Encoded: 0.000100476884084665303374619011

    decoded = nanote.decode(encoded)
    print(f"Decoded: {decoded}")
    # Decoded: hello, world!


if __name__ == "__main__":
    main()
