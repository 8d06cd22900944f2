"""Fork-join helpers for splitting arithmetic across worker threads.

Important things defined here:
 - Job: an abstract superclass for a unit of work run on its own thread
 - MultiplyJob: distributes a slice of one polynomial's terms over another
   polynomial, accumulating into a private dictionary
 - run_jobs: start a batch of Jobs and wait for every one of them to finish
 - index_ranges: split `range(n)` into contiguous, non-overlapping pieces

Jobs never share mutable state.  Each one reads inputs that nobody writes
while it runs and writes only to attributes of its own.  Clients must call
`run_jobs` (or `.join()` on every Job) before looking at any results; after
that no locking is needed to read them.

Jobs run on threads, so they see the same option values (see
sparsepoly.opts) as the code that started them.
"""

import threading

from sparsepoly.common import divide_integers_and_round_up

class JobFailed(Exception):
    """Raised by `run_jobs` when a Job's .run() raised an exception.

    The original exception is available as `__cause__` and as `.job.error`.
    """
    def __init__(self, job):
        super().__init__("{} failed: {!r}".format(job, job.error))
        self.job = job

class Job(object):
    """A unit of work that runs on its own thread.

    Subclasses must implement `self.run()`.  Optionally, subclasses should
    implement `self.__str__()` to return a nice name for the job.

    Clients should invoke `.start()` after construction to start the Job.  They
    must invoke `.join()` at some point to wait for it.

    If .run() throws an exception, it is stored in `job.error` and
    `job.successful` is False once the job is done.
    """

    def __init__(self):
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._done = False
        self.error = None

    def start(self):
        """Start the job by invoking its .run() method asynchronously."""
        self._thread.start()

    def run(self):
        """Subclasses should override this to implement the Job's behavior."""
        raise NotImplementedError()

    def _run(self):
        try:
            self.run()
        except Exception as e:
            self.error = e
        finally:
            self._done = True

    @property
    def done(self):
        """True if the job has stopped."""
        return self._done

    @property
    def successful(self):
        """True if the job has stopped without throwing an exception."""
        return self._done and self.error is None

    def join(self, timeout=None):
        """Wait for the job to finish.

        This procedure may be called more than once, even on an already-joined
        Job.  If a timeout is given, check .done afterwards.
        """
        self._thread.join(timeout=timeout)

def run_jobs(jobs):
    """Start every job, then wait for all of them to finish.

    Returns the list of jobs.  If any job failed, raises JobFailed for the
    first failed job (in the order given) once all jobs have stopped.
    """
    jobs = list(jobs)
    for j in jobs:
        j.start()
    for j in jobs:
        j.join()
    for j in jobs:
        if not j.successful:
            raise JobFailed(j) from j.error
    return jobs

def index_ranges(n, count):
    """Split range(n) into at most `count` contiguous (start, stop) pairs.

    Every range except possibly the last has the same length.  Ranges that
    would be empty are left out, so fewer than `count` pairs may be returned:

        index_ranges(10, 4) == [(0, 3), (3, 6), (6, 9), (9, 10)]
        index_ranges(9, 8)  == [(0, 2), (2, 4), (4, 6), (6, 8), (8, 9)]
    """
    assert count > 0
    if n <= 0:
        return []
    size = divide_integers_and_round_up(n, count)
    res = []
    for i in range(count):
        start = i * size
        stop = min(start + size, n)
        if start < stop:
            res.append((start, stop))
    return res

def distribute(left, right, accumulator, start=0, stop=None):
    """Multiply terms left[start:stop] by every term of `right`.

    `left` and `right` are sequences of (power, coefficient) pairs.  Products
    are summed into `accumulator` (a dict from power to coefficient), which is
    also returned.
    """
    if stop is None:
        stop = len(left)
    for i in range(start, stop):
        power_a, coeff_a = left[i]
        for power_b, coeff_b in right:
            power = power_a + power_b
            accumulator[power] = accumulator.get(power, 0) + coeff_a * coeff_b
    return accumulator

class MultiplyJob(Job):
    """Distributes left[start:stop] over all of `right` on a worker thread.

    The products end up in `self.accumulator`, which belongs to this job
    alone.  Read it only after the job has been joined.
    """

    def __init__(self, left, right, start, stop):
        super().__init__()
        self.left = left
        self.right = right
        self.start_index = start
        self.stop_index = stop
        self.accumulator = {}

    def run(self):
        distribute(self.left, self.right, self.accumulator, self.start_index, self.stop_index)

    def __str__(self):
        return "MultiplyJob[{}:{}]".format(self.start_index, self.stop_index)
