"""Digest computation for package archives."""

import hashlib

from debscan.models import Digests


def compute_digests(data: bytes) -> Digests:
    """Compute the MD5, SHA1 and SHA256 digests of an archive.

    Args:
        data: Raw bytes of the archive (may be empty).

    Returns:
        Digests with lowercase hex strings.
    """
    md5 = hashlib.md5()
    sha1 = hashlib.sha1()
    sha256 = hashlib.sha256()
    for hasher in (md5, sha1, sha256):
        hasher.update(data)

    return Digests(md5=md5.hexdigest(), sha1=sha1.hexdigest(), sha256=sha256.hexdigest())
