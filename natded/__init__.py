"""natded: a trusted proof kernel for propositional Natural Deduction."""

from .formulas import Conj, Disj, Formula, Impl, Var
from .assumptions import AssumptionSet, Label, merge
from .errors import (
    CaseMismatch,
    ConclusionMismatch,
    FormulaMismatch,
    InconsistentLabel,
    KernelError,
    LabelNotFound,
    NotAConjunction,
    NotADisjunction,
    NotAnImplication,
    OpenAssumptions,
    PremiseMismatch,
    ScopeError,
    ShapeMismatch,
)
from .kernel import (
    Proof,
    Side,
    conj_elim,
    conj_intro,
    disj_elim,
    disj_intro,
    impl_elim,
    impl_intro,
    shows,
    suppose,
)
from .scoped import AssumptionScope, FreshLabel, Hypothesis
from .notation import ParseError, parse_formula, render_formula, render_proof
from .helpers import conj, disj, impl, var, variables
from .result import Ok, Err, Result

__all__ = [
    # Formulas
    "Conj", "Disj", "Formula", "Impl", "Var",
    # Assumptions
    "AssumptionSet", "Label", "merge",
    # Errors
    "CaseMismatch", "ConclusionMismatch", "FormulaMismatch",
    "InconsistentLabel", "KernelError", "LabelNotFound", "NotAConjunction",
    "NotADisjunction", "NotAnImplication", "OpenAssumptions",
    "PremiseMismatch", "ScopeError", "ShapeMismatch",
    # Kernel
    "Proof", "Side", "conj_elim", "conj_intro", "disj_elim", "disj_intro",
    "impl_elim", "impl_intro", "shows", "suppose",
    # Scoped hypotheses
    "AssumptionScope", "FreshLabel", "Hypothesis",
    # Notation
    "ParseError", "parse_formula", "render_formula", "render_proof",
    # Helpers
    "conj", "disj", "impl", "var", "variables",
    # Result
    "Ok", "Err", "Result",
]
