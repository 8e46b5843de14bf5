"""Hashing utilities."""

import hashlib


class CollectionDigest:
    """Incremental fingerprint over the raw texts of a collection's posts.

    Each text is fed with its byte length as a prefix, so adding, removing,
    editing or reordering posts always changes the result, even for empty
    posts or texts that would concatenate to the same bytes.
    """

    def __init__(self) -> None:
        self._hash = hashlib.sha256()
        self.count = 0

    def update(self, text: str) -> None:
        # Lone surrogates from truncated emoji escapes must still hash
        data = text.encode("utf-8", "surrogatepass")
        self._hash.update(f"{len(data)}:".encode("ascii"))
        self._hash.update(data)
        self.count += 1

    def hexdigest(self) -> str:
        return self._hash.hexdigest()


def digest_texts(texts) -> str:
    """Digest an ordered sequence of raw texts in one call."""
    digest = CollectionDigest()
    for text in texts:
        digest.update(text)
    return digest.hexdigest()
