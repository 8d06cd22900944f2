"""Sparse polynomials of one variable with integer coefficients.

A Polynomial stores only its non-zero terms, as a dictionary from power to
coefficient kept in descending order of power, so the first entry is always
the leading term.  The one exception is zero itself, which is stored as the
single term 0x^0.

Polynomials are values: every operator returns a new Polynomial and never
modifies its operands.

Multiplying two polynomials may split the work across threads; see the
`max-multiply-workers` option and `Polynomial.multiply`.
"""

from collections.abc import Mapping
import functools

from sparsepoly.common import OrderedSet, FrozenDict, check_integer, divide_integers_truncating
from sparsepoly.jobs import MultiplyJob, distribute, index_ranges, run_jobs
from sparsepoly.logging import task, event
from sparsepoly.opts import Option

max_workers = Option("max-multiply-workers", int, 8, description="Most threads one polynomial multiplication may use")

class DivisionByZero(ZeroDivisionError):
    """Raised when the divisor of `%` is the zero polynomial."""
    pass

def _is_integer(x):
    return isinstance(x, int) and not isinstance(x, bool)

def _clean(terms):
    """Return a normalized copy of `terms` (a dict from power to coefficient).

    Zero coefficients are dropped and the rest are put in descending order of
    power.  If nothing is left, the result is {0: 0}.
    """
    res = { p : c for p, c in sorted(terms.items(), key=lambda t: t[0], reverse=True) if c != 0 }
    if not res:
        res[0] = 0
    return res

@functools.total_ordering
class Term(object):
    """A single term c*x^e.

    Terms unpack like (power, coefficient) pairs and order by power first.
    """
    __slots__ = ("power", "coefficient")
    def __init__(self, power, coefficient):
        self.power = power
        self.coefficient = coefficient
    def __iter__(self):
        yield self.power
        yield self.coefficient
    def __eq__(self, other):
        if not isinstance(other, Term):
            return NotImplemented
        return self.power == other.power and self.coefficient == other.coefficient
    def __lt__(self, other):
        if not isinstance(other, Term):
            return NotImplemented
        return (self.power, self.coefficient) < (other.power, other.coefficient)
    def __hash__(self):
        return hash((self.power, self.coefficient))
    def __str__(self):
        return "{}x^{}".format(self.coefficient, self.power)
    def __repr__(self):
        return "Term({}, {})".format(self.power, self.coefficient)

@functools.total_ordering
class Polynomial(object):
    __slots__ = ("terms",)

    def __init__(self, terms=()):
        """Create a polynomial.

        `terms` may be another Polynomial (which is copied), a mapping from
        power to coefficient, or an iterable of (power, coefficient) pairs.
        Coefficients of repeated powers are added together and zero terms are
        dropped, so for example

            Polynomial([(1, 2), (1, 3), (0, 0)]) == Polynomial([(1, 5)])

        Powers must be non-negative integers and coefficients integers.
        """
        if isinstance(terms, Polynomial):
            self.terms = dict(terms.terms)
            return
        if isinstance(terms, Mapping):
            terms = terms.items()
        acc = {}
        for power, coeff in terms:
            check_integer(power, "power")
            check_integer(coeff, "coefficient")
            if power < 0:
                raise ValueError("negative power {}".format(power))
            acc[power] = acc.get(power, 0) + coeff
        self.terms = _clean(acc)

    @classmethod
    def _from_terms(cls, terms):
        # `terms` must already be validated; it is normalized here.
        res = cls.__new__(cls)
        res.terms = _clean(terms)
        return res

    @classmethod
    def term(cls, coefficient, power):
        """The single-term polynomial coefficient*x^power."""
        return cls([(power, coefficient)])

    # ------------------------------------------------------------------------
    # Inspection

    def is_zero(self):
        return len(self.terms) == 1 and next(iter(self.terms.values())) == 0

    def degree(self):
        """The highest power present.  The zero polynomial has degree 0."""
        return next(iter(self.terms))

    def leading_term(self):
        return Term(*next(iter(self.terms.items())))

    def get_coefficient(self, power):
        return self.terms.get(power, 0)

    def powers(self):
        """The powers of the non-zero terms, highest first."""
        if self.is_zero():
            return OrderedSet()
        return OrderedSet(self.terms)

    def canonical_form(self):
        """The non-zero terms as (power, coefficient) pairs, highest power first.

        The zero polynomial gives [(0, 0)].
        """
        out = [(p, c) for p, c in self.terms.items() if c != 0]
        if not out:
            return [(0, 0)]
        return out

    def __len__(self):
        return len(self.terms)

    def __iter__(self):
        for p, c in self.terms.items():
            yield Term(p, c)

    def copy(self):
        return Polynomial(self)

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    # ------------------------------------------------------------------------
    # Comparison

    def __eq__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.terms == other.terms

    def __lt__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        if self.degree() != other.degree():
            return self.degree() < other.degree()
        for power in sorted(self.powers() | other.powers(), reverse=True):
            a = self.get_coefficient(power)
            b = other.get_coefficient(power)
            if a != b:
                return a < b
        return False

    def __hash__(self):
        return hash(FrozenDict(self.terms))

    # ------------------------------------------------------------------------
    # Arithmetic

    def __add__(self, other):
        if isinstance(other, Polynomial):
            res = dict(self.terms)
            for p, c in other.terms.items():
                res[p] = res.get(p, 0) + c
            return Polynomial._from_terms(res)
        if _is_integer(other):
            res = dict(self.terms)
            res[0] = res.get(0, 0) + other
            return Polynomial._from_terms(res)
        return NotImplemented

    def __radd__(self, other):
        if _is_integer(other):
            return self + other
        return NotImplemented

    def __neg__(self):
        return self * -1

    def __sub__(self, other):
        if isinstance(other, Polynomial):
            return self + (-other)
        if _is_integer(other):
            return self + (-other)
        return NotImplemented

    def __rsub__(self, other):
        if _is_integer(other):
            return (-self) + other
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, Polynomial):
            return self.multiply(other)
        if _is_integer(other):
            return Polynomial._from_terms({ p : c * other for p, c in self.terms.items() })
        return NotImplemented

    def __rmul__(self, other):
        if _is_integer(other):
            return self * other
        return NotImplemented

    def multiply(self, other, workers=None):
        """Multiply by another polynomial.

        Every term of `self` is multiplied by every term of `other`.  The terms
        of `self` are split into contiguous chunks, one per worker thread, and
        each worker sums its products into a private dictionary; the
        dictionaries are added together once all workers are done.

        The number of workers is the `max-multiply-workers` option, lowered
        to `workers` if that is given, and never more than the number of
        terms in `self`.  With one worker no thread is started.  The result
        does not depend on the number of workers.
        """
        if not isinstance(other, Polynomial):
            raise TypeError("cannot multiply Polynomial by {}".format(type(other).__name__))
        if workers is None:
            workers = max_workers.value
        else:
            check_integer(workers, "workers")
            if workers < 1:
                raise ValueError("workers must be positive, not {}".format(workers))

        if self.is_zero() or other.is_zero():
            event("multiply by zero")
            return Polynomial()

        left = list(self.terms.items())
        right = list(other.terms.items())
        if not left or not right:
            return Polynomial()

        count = min(workers, max_workers.value, len(left))
        with task("multiply", left_terms=len(left), right_terms=len(right), workers=count):
            if count <= 1:
                return Polynomial._from_terms(distribute(left, right, {}))

            jobs = run_jobs(MultiplyJob(left, right, start, stop)
                for start, stop in index_ranges(len(left), count))
            event("merging {} accumulators".format(len(jobs)))
            res = {}
            for j in jobs:
                for p, c in j.accumulator.items():
                    res[p] = res.get(p, 0) + c
            return Polynomial._from_terms(res)

    def __mod__(self, divisor):
        """Remainder of polynomial long division by `divisor`.

        Each step divides the leading coefficients with integer division
        rounded toward zero, so over the integers the result is only a true
        remainder when the divisor's leading coefficient divides the
        dividend's leading coefficients (e.g. when the divisor is monic).
        Division stops early if the rounded factor is zero, since no further
        step could change the remainder.

        Raises DivisionByZero if `divisor` is the zero polynomial.
        """
        if not isinstance(divisor, Polynomial):
            return NotImplemented
        if divisor.is_zero():
            raise DivisionByZero("polynomial division by zero")

        remainder = Polynomial(self)
        lead = divisor.leading_term()
        with task("remainder", dividend_degree=remainder.degree(), divisor_degree=lead.power):
            while not remainder.is_zero() and remainder.degree() >= lead.power:
                power, coeff = remainder.leading_term()
                factor = divide_integers_truncating(coeff, lead.coefficient)
                if factor == 0:
                    event("{} does not divide {}; stopping at degree {}".format(
                        lead.coefficient, coeff, power))
                    break
                remainder = remainder - Polynomial.term(factor, power - lead.power) * divisor
        return remainder

    # ------------------------------------------------------------------------
    # Printing

    def debug_string(self):
        """Terms as "<coefficient>x^<power>" separated by spaces, highest power first."""
        return " ".join(str(t) for t in self)

    def dump(self, file=None):
        """Print debug_string() to `file` (default stdout)."""
        print(self.debug_string(), file=file)

    def __str__(self):
        return self.debug_string()

    def __repr__(self):
        return "Polynomial({!r})".format(self.canonical_form())

Polynomial.ZERO = Polynomial()
Polynomial.ONE  = Polynomial([(0, 1)])
Polynomial.X    = Polynomial([(1, 1)])
