"""Python-native call mocking built around expect, call and verify.

A :class:`Mock` intercepts the callable members of an object, routes each
call to the first matching :class:`Expectation` and reports calls nobody
expected. :class:`Spy` records calls while passing them through, and
:class:`CallMox` manages several doubles for a single test.
"""

from __future__ import annotations

from .actions import Action, Invoker
from .calls import Call, SpyCall
from .cardinality import Cardinality
from .comparators import (
    ANY,
    ARRAY,
    BOOLEAN,
    FUNCTION,
    NUMBER,
    OBJECT,
    STRING,
    Any,
    Comparator,
    Contains,
    IsA,
    Predicate,
    Regex,
    Shape,
    StartsWith,
    TypeChecker,
)
from .controller import CallMox, Phase
from .errors import (
    ActionSaturatedError,
    ActionsFinalizedError,
    CallMoxError,
    CardinalityExceededError,
    ConfigurationConflictError,
    InvalidArgumentError,
    InvalidCallbackError,
    LifecycleError,
    NoAvailableActionError,
    UnexpectedCallError,
    UnknownCallError,
    UnresolvedExpectationsError,
    VerificationError,
)
from .expectations import Expectation
from .formatting import format_call
from .matchers import create_matcher
from .mock import Mock
from .pytest_plugin import call_mox as call_mox_fixture
from .spy import Spy

__all__ = [
    "ANY",
    "ARRAY",
    "BOOLEAN",
    "FUNCTION",
    "NUMBER",
    "OBJECT",
    "STRING",
    "Action",
    "ActionSaturatedError",
    "ActionsFinalizedError",
    "Any",
    "Call",
    "CallMox",
    "CallMoxError",
    "Cardinality",
    "CardinalityExceededError",
    "Comparator",
    "ConfigurationConflictError",
    "Contains",
    "Expectation",
    "InvalidArgumentError",
    "InvalidCallbackError",
    "Invoker",
    "IsA",
    "LifecycleError",
    "Mock",
    "NoAvailableActionError",
    "Phase",
    "Predicate",
    "Regex",
    "Shape",
    "Spy",
    "SpyCall",
    "StartsWith",
    "TypeChecker",
    "UnexpectedCallError",
    "UnknownCallError",
    "UnresolvedExpectationsError",
    "VerificationError",
    "call_mox_fixture",
    "create_matcher",
    "format_call",
]
