"""Module-local tuning options.

Modules in this package declare their settings (how many workers a
multiplication may use, whether to log) as Option instances right next to
the code that reads them:

    max_workers = Option("max-multiply-workers", int, 8)
    ...
    count = min(max_workers.value, len(terms))

Important functions:
 - override: a context manager that temporarily changes option values
 - snapshot/restore: capture option values and re-apply them, e.g. inside a
   worker job
 - setup/read: expose every declared Option on an embedding program's
   argparse parser
"""

from contextlib import contextmanager

# Every Option declared so far, by name.
_OPTS = {}

# Values to use for options whose declaring module has not been imported yet.
_PENDING = {}

class Option(object):
    def __init__(self, name, type, default, description="", metavar=None):
        assert type in (bool, str, int)
        assert name not in _OPTS, "option {} declared twice".format(name)
        self.name = name
        self.type = type
        self.default = default
        self.description = description
        self.metavar = metavar
        self.value = _PENDING.get(name, default)
        _OPTS[name] = self

    def __bool__(self):
        raise Exception(
            "Option {} was used as a boolean; ".format(self.name) +
            "read its value with `_.value` instead.")

    def __repr__(self):
        return "Option({!r}, {}, {!r})".format(self.name, self.type.__name__, self.value)

def get(name):
    """Return the declared Option called `name`.

    Raises KeyError if no module has declared it."""
    return _OPTS[name]

def snapshot():
    """Produce a snapshot of current option values."""
    return { name : o.value for name, o in _OPTS.items() }

def restore(snap):
    """Restore a snapshot of option values."""
    for name, value in snap.items():
        if name in _OPTS:
            _OPTS[name].value = value
        else:
            _PENDING[name] = value

@contextmanager
def override(**values):
    """Temporarily set option values.

    Keyword names use underscores in place of dashes:

        with override(max_multiply_workers=1):
            p * q

    Every name must belong to a declared Option; KeyError otherwise.
    """
    new_values = { k.replace("_", "-") : v for k, v in values.items() }
    for name in new_values:
        get(name)
    saved = snapshot()
    restore(new_values)
    try:
        yield
    finally:
        restore(saved)

def _flag(o):
    if o.type is bool and o.default:
        return "no-" + o.name
    return o.name

def setup(parser):
    """Add a command-line argument to `parser` for every declared Option."""
    for o in _OPTS.values():
        if o.type is bool:
            parser.add_argument("--" + _flag(o), action="store_true", help=o.description)
        else:
            parser.add_argument("--" + _flag(o), metavar=o.metavar, type=o.type, default=o.default,
                help="{} (default={!r})".format(o.description, o.default).strip())

def read(args):
    """Set option values from the namespace returned by `parser.parse_args()`."""
    for o in _OPTS.values():
        v = getattr(args, _flag(o).replace("-", "_"))
        o.value = (not v) if (o.type is bool and o.default) else o.type(v)
