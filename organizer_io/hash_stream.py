from blake3 import blake3


def hash_file(path: str, chunk_bytes: int = 4 * 1024 * 1024) -> str:
    h = blake3()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_bytes), b""):
            h.update(chunk)
    return h.hexdigest()
