"""Header text wrapping for the monospace renderers."""

from typing import Iterable


def _flush(acc: str) -> str:
    return acc.removesuffix(" ")


def wrap(width: int, lines: Iterable[str]) -> list[str]:
    """Wrap header lines to ``width`` columns.

    Lines shorter than ``width`` pass through untouched. Longer lines are
    soft-wrapped on single spaces; a word longer than ``width`` is cut into
    ``width``-sized pieces ending in ``-`` and its remainder keeps packing
    with the words that follow. Each input line is wrapped on its own: text
    from one line never joins the next.
    """
    if width < 1:
        raise ValueError(f"wrap width must be >= 1, got {width}")

    out: list[str] = []
    for line in lines:
        if len(line) < width:
            out.append(line)
            continue

        acc = ""
        for word in line.split(" "):
            if len(word) > width:
                if acc:
                    out.append(_flush(acc))
                j = 0
                while j + width < len(word):
                    out.append(word[j:j + width] + "-")
                    j += width
                acc = word[j:] + " "
                continue

            if len(acc) + len(word) < width:
                acc += word + " "
            else:
                if acc:
                    out.append(_flush(acc))
                acc = word + " "

        out.append(_flush(acc))
    return out
