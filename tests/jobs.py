import threading
import unittest

from sparsepoly.jobs import Job, JobFailed, MultiplyJob, distribute, index_ranges, run_jobs
from sparsepoly import opts
import sparsepoly.polynomials

class TestIndexRanges(unittest.TestCase):

    def test_even_split(self):
        self.assertEqual(index_ranges(8, 4), [(0, 2), (2, 4), (4, 6), (6, 8)])

    def test_last_range_shorter(self):
        self.assertEqual(index_ranges(10, 4), [(0, 3), (3, 6), (6, 9), (9, 10)])

    def test_empty_ranges_skipped(self):
        self.assertEqual(index_ranges(9, 8), [(0, 2), (2, 4), (4, 6), (6, 8), (8, 9)])

    def test_single(self):
        self.assertEqual(index_ranges(5, 1), [(0, 5)])

    def test_nothing(self):
        self.assertEqual(index_ranges(0, 3), [])

    def test_ranges_cover_exactly_once(self):
        for n in range(1, 40):
            for count in range(1, 10):
                ranges = index_ranges(n, count)
                assert len(ranges) <= count
                covered = [i for start, stop in ranges for i in range(start, stop)]
                self.assertEqual(covered, list(range(n)))

class TestDistribute(unittest.TestCase):

    def test_distribute(self):
        left = [(1, 1), (0, 3)]
        right = [(1, 1), (0, 1)]
        self.assertEqual(distribute(left, right, {}), {2: 1, 1: 4, 0: 3})

    def test_distribute_slice(self):
        left = [(1, 1), (0, 3)]
        right = [(1, 1), (0, 1)]
        self.assertEqual(distribute(left, right, {}, 1, 2), {1: 3, 0: 3})

    def test_distribute_keeps_zero_sums(self):
        left = [(1, 1), (0, 1)]
        right = [(1, 1), (0, -1)]
        self.assertEqual(distribute(left, right, {}), {2: 1, 1: 0, 0: -1})

class TestJobs(unittest.TestCase):

    def test_multiply_jobs_have_private_accumulators(self):
        left = [(2, 1), (1, 1), (0, 1)]
        right = [(0, 2)]
        jobs = run_jobs(MultiplyJob(left, right, start, stop) for start, stop in index_ranges(3, 3))
        self.assertEqual([j.accumulator for j in jobs], [{2: 2}, {1: 2}, {0: 2}])
        assert all(j.done and j.successful for j in jobs)

    def test_failure_is_reported(self):
        class Boom(Job):
            def run(self):
                raise RuntimeError("boom")
        class Fine(Job):
            def run(self):
                pass
        fine = Fine()
        with self.assertRaises(JobFailed) as ctx:
            run_jobs([fine, Boom()])
        assert isinstance(ctx.exception.__cause__, RuntimeError)
        # every job was joined before the failure was raised
        assert fine.done

    def test_runs_on_another_thread(self):
        class WhereAmI(Job):
            def run(self):
                self.thread = threading.current_thread()
        j, = run_jobs([WhereAmI()])
        assert j.thread is not threading.current_thread()

    def test_options_are_visible_in_jobs(self):
        class ReadOption(Job):
            def run(self):
                self.value = opts.get("max-multiply-workers").value
        with opts.override(max_multiply_workers=3):
            j, = run_jobs([ReadOption()])
        self.assertEqual(j.value, 3)

    def test_unimplemented_run(self):
        with self.assertRaises(JobFailed):
            run_jobs([Job()])
