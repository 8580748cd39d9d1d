from changelens.codec.change_url import (
    SEPARATOR,
    change_url,
    decode,
    encode,
    page_url,
)

__all__ = ["SEPARATOR", "change_url", "decode", "encode", "page_url"]
