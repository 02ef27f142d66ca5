"""Minimal stand-in for the external document simplifier.

Reads a document path from stdin and prints a plain-language rewrite of the
text to stdout. Diagnostics go to stderr with exit status 1.
Only .txt documents are supported here; real extraction lives elsewhere.
"""

import re
import sys
from pathlib import Path

PLAIN_TERMS = {
    "hereinafter": "from now on",
    "heretofore": "until now",
    "notwithstanding": "despite",
    "pursuant to": "under",
    "in lieu of": "instead of",
    "prior to": "before",
    "shall": "must",
    "whereas": "because",
    "indemnify": "compensate",
    "terminate": "end",
}


def simplify(text: str) -> str:
    for term, plain in PLAIN_TERMS.items():
        text = re.sub(rf"\b{re.escape(term)}\b", plain, text, flags=re.IGNORECASE)
    return re.sub(r"[ \t]+", " ", text).strip()


def main() -> int:
    raw_path = sys.stdin.read().strip()
    if not raw_path:
        print("No file path received on stdin", file=sys.stderr)
        return 1

    path = Path(raw_path)
    if not path.is_file():
        print(f"File not found: {path}", file=sys.stderr)
        return 1

    if path.suffix.lower() != ".txt":
        print(f"Unsupported document type: {path.suffix}", file=sys.stderr)
        return 1

    text = path.read_text(encoding="utf-8", errors="replace")
    print(simplify(text))
    return 0


if __name__ == "__main__":
    sys.exit(main())
