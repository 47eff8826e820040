import re

_NON_ALNUM = re.compile(r'[^a-z0-9]+')

def slugify(value):
    """Lowercase, collapse non-alphanumeric runs to one hyphen, strip edge hyphens."""
    if value is None:
        return ''
    slug = _NON_ALNUM.sub('-', str(value).strip().lower())
    return slug.strip('-')

def split_objectives(text):
    """Newline-delimited textarea -> list of trimmed, non-empty lines in order."""
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]

def join_objectives(objectives):
    return '\n'.join(objectives or [])

def matches_query(query, *fields):
    """Case-insensitive substring match against the space-joined display fields."""
    if not query:
        return True
    haystack = ' '.join('' if f is None else str(f) for f in fields).lower()
    return query.lower() in haystack

def filter_rows(rows, query, fields):
    """Keep rows whose `fields(row)` tuple matches `query`."""
    if not query:
        return list(rows)
    return [row for row in rows if matches_query(query, *fields(row))]

def parse_int(value, default=0):
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default

def parse_bool(value):
    """Checkbox-style form values."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'on', 'yes')
