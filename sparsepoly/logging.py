"""Indented, timed log messages for polynomial arithmetic.

Important functions:
 - task: a context manager to wrap a self-contained step (e.g. one
   multiplication); logs its start and its duration
 - event: print a log message indented under the active tasks
 - timings/dump_profile: read back accumulated time per task path

Nothing is printed unless the `verbose` option is set.  Durations are
accumulated regardless, so a profile can be dumped after a quiet run.
"""

from collections import defaultdict
from contextlib import contextmanager
import datetime
import sys
import threading

from sparsepoly.opts import Option

verbose = Option("verbose", bool, False, description="Log arithmetic steps to stderr")

_times = defaultdict(float)
_local = threading.local()
_times_lock = threading.Lock()

def _stack():
    # Each thread gets its own task nesting.
    if not hasattr(_local, "stack"):
        _local.stack = []
    return _local.stack

def log(string):
    if verbose.value:
        print(string, file=sys.stderr)

def _format_kwargs(kwargs):
    if not kwargs:
        return ""
    return " [" + ", ".join("{}={}".format(k, v) for k, v in kwargs.items()) + "]"

def task_begin(name, **kwargs):
    stack = _stack()
    stack.append((name, datetime.datetime.now()))
    if not verbose.value:
        return
    indent = "  " * (len(stack) - 1)
    log("{}{}{}...".format(indent, name, _format_kwargs(kwargs)))

def task_end():
    end = datetime.datetime.now()
    stack = _stack()
    key = tuple(name for name, start in stack)
    name, start = stack.pop()
    duration = (end - start).total_seconds()
    with _times_lock:
        _times[key] += duration
    if not verbose.value:
        return
    indent = "  " * len(stack)
    log("{}Finished {} [duration={:.3}s]".format(indent, name, duration))

@contextmanager
def task(name, **kwargs):
    try:
        yield task_begin(name, **kwargs)
    finally:
        task_end()

def event(name):
    if not verbose.value:
        return
    indent = "  " * len(_stack())
    log(indent + name)

def timings():
    """Total seconds spent in each task, keyed by the tuple of nested task names."""
    with _times_lock:
        return dict(_times)

def reset_timings():
    with _times_lock:
        _times.clear()

def dump_profile(path):
    with open(path, "w") as f:
        t = timings()
        for k in sorted(t.keys(), key=t.get, reverse=True):
            f.write("{:16.3}".format(t[k]))
            f.write(" ")
            f.write(", ".join(k))
            f.write("\n")
