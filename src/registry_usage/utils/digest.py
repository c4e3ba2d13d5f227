"""Digest handling for image URIs."""


def image_key(uri: str) -> str:
    """Strip the digest suffix from an image URI.

    Args:
        uri: Image URI (e.g., "us-docker.pkg.dev/proj/repo/app@sha256:abc")

    Returns:
        Everything before the first "@", or the URI unchanged if it has none
    """
    return uri.split("@", 1)[0]
