from seqsort._cli import main
from seqsort._contracts import against, ensures, get_contracts, requires, spec
from seqsort._engine import ObligationResult, check_function, check_module
from seqsort._errors import ContractViolation, InvalidArgument
from seqsort._properties import is_permutation, is_sorted
from seqsort._sorter import bubble_sort, sort, sort_spec
from seqsort._strategies import int_sequences, strategy_for_function
from seqsort._tutorial import install_tutorial, load_tutorial, render_tutorial

__all__ = [
    "ContractViolation",
    "InvalidArgument",
    "ObligationResult",
    "against",
    "bubble_sort",
    "check_function",
    "check_module",
    "ensures",
    "get_contracts",
    "install_tutorial",
    "int_sequences",
    "is_permutation",
    "is_sorted",
    "load_tutorial",
    "main",
    "render_tutorial",
    "requires",
    "sort",
    "sort_spec",
    "spec",
    "strategy_for_function",
]
