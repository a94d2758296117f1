"""Word filter applied to post bodies before they are stored."""

REPLACEMENT = "****"
BANNED_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})


def censor(body: str) -> str:
    # split on single spaces so surrounding punctuation and spacing survive
    words = body.split(" ")
    return " ".join(REPLACEMENT if w.lower() in BANNED_WORDS else w for w in words)
