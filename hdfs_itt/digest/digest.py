import hashlib
import io


DIGEST_ALGORITHM = "sha512"
READ_BLOCK_SIZE = 1024 * 1024


def digest_range(reference: io.BufferedReader, offset: int, length: int) -> str:
    digest = hashlib.new(DIGEST_ALGORITHM)
    reference.seek(offset)

    remaining = length
    while remaining > 0:
        block = reference.read(min(READ_BLOCK_SIZE, remaining))
        if not block:
            break

        digest.update(block)
        remaining -= len(block)

    return digest.hexdigest()


def digest_file(path: str) -> str:
    digest = hashlib.new(DIGEST_ALGORITHM)
    with open(path, "rb") as artifact:
        while block := artifact.read(READ_BLOCK_SIZE):
            digest.update(block)

    return digest.hexdigest()
