"""
globs.py - gulp-style watch globs on top of fnmatch.

Patterns are matched segment by segment against POSIX relative paths, so `*`
never crosses a `/`; a `**` segment spans any number of directories. As with
gulp, wildcards skip names starting with a dot.
"""

from fnmatch import fnmatchcase


def _match_name(pattern, name):
    if name.startswith('.') and not pattern.startswith('.'):
        return False
    return fnmatchcase(name, pattern)


def _match_parts(parts, names):
    if not parts:
        return not names
    if parts[0] == '**':
        for i in range(len(names) + 1):
            if _match_parts(parts[1:], names[i:]):
                return True
            if i < len(names) and names[i].startswith('.'):
                return False
        return False
    return bool(names) and _match_name(parts[0], names[0]) and _match_parts(parts[1:], names[1:])


def match_glob(pattern, relpath):
    parts = [p for p in pattern.split('/') if p not in ('', '.')]
    return _match_parts(parts, relpath.split('/'))


class GlobSet:

    def __init__(self, patterns):
        self.patterns = tuple(patterns)

    def matches(self, relpath):
        return any(match_glob(pattern, relpath) for pattern in self.patterns)

    def __repr__(self):
        return 'GlobSet(%r)' % (self.patterns,)
