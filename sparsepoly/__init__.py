"""Sparse integer polynomials of one variable."""

from sparsepoly.polynomials import Polynomial, Term, DivisionByZero

__all__ = ["Polynomial", "Term", "DivisionByZero"]
