YEAR = 2026


def tsv(*rows):
    """Joins rows of fields into sheet text (tab-separated, one line per row)."""
    return "\n".join("\t".join(r) for r in rows)


def shift(day, start="08:00", end="16:00", note=""):
    """Row in the fallback layout: col 1 date, 2 start, 3 end, 5 note."""
    return ["", day, start, end, "", note]
