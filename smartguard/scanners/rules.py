"""Vulnerability rule catalog.

The catalog is reference data: an ordered, immutable tuple of
:class:`~smartguard.models.Rule` objects built once at import time.
Definition order decides the order in which rules are tested on a line;
report order is decided by severity and line number in the engine.

A definition lists its ``patterns`` in test order. A plain string is a
regular expression; a :class:`SubstringMatcher` entry is a literal
substring. Both are matched case-insensitively.
"""

import logging
from collections.abc import Iterable, Mapping

from smartguard.models import CatalogConfigurationError, Matcher, Rule, Severity
from smartguard.scanners.matchers import RegexMatcher, SubstringMatcher

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Rule definitions
# ---------------------------------------------------------------------------

_RULE_DEFINITIONS: list[dict] = [
    {
        "id": "reentrancy",
        "name": "Reentrancy Vulnerability",
        "description": (
            "Functions that could be exploited through reentrancy attacks where "
            "an external call is made before state changes."
        ),
        "severity": Severity.CRITICAL,
        "patterns": [r"msg\.sender\.call\{.*\}\(.*\)"],
        "suggestion": (
            "Implement the checks-effects-interactions pattern. Always update state "
            "variables before making external calls. Consider using ReentrancyGuard "
            "from OpenZeppelin."
        ),
    },
    {
        "id": "tx-origin",
        "name": "tx.origin Authentication",
        "description": "Using tx.origin for authentication is vulnerable to phishing attacks.",
        "severity": Severity.HIGH,
        "patterns": [SubstringMatcher("tx.origin")],
        "suggestion": "Use msg.sender instead of tx.origin for authentication.",
    },
    {
        "id": "unchecked-return",
        "name": "Unchecked Return Values",
        "description": "Not checking the return value of functions that could fail.",
        "severity": Severity.MEDIUM,
        "patterns": [r"\.send\s*\([^;]*\)\s*(?!\s*require|\s*if)"],
        "suggestion": (
            "Always check return values of low-level calls. Consider using "
            "OpenZeppelin's SafeERC20 for token transfers."
        ),
    },
    {
        "id": "integer-overflow",
        "name": "Integer Overflow/Underflow",
        "description": "Arithmetic operations that could result in integer overflow or underflow.",
        "severity": Severity.HIGH,
        "patterns": [SubstringMatcher("+="), SubstringMatcher("-=")],
        "suggestion": (
            "Use SafeMath library for Solidity versions < 0.8.0. For Solidity >= 0.8.0, "
            "use the built-in overflow/underflow protection or unchecked blocks when "
            "appropriate."
        ),
    },
    {
        "id": "timestamp-dependence",
        "name": "Timestamp Dependence",
        "description": "Relying on block.timestamp for critical logic can be manipulated by miners.",
        "severity": Severity.MEDIUM,
        "patterns": [SubstringMatcher("block.timestamp"), r"\bnow\b"],
        "suggestion": (
            "Avoid using block.timestamp for random number generation or precise "
            "timing. If needed, consider using an oracle for time-sensitive operations."
        ),
    },
    {
        "id": "delegatecall",
        "name": "Dangerous delegatecall",
        "description": (
            "Using delegatecall with user-supplied addresses or data can lead to "
            "contract takeover."
        ),
        "severity": Severity.CRITICAL,
        "patterns": [r"\.delegatecall\s*\("],
        "suggestion": (
            "Avoid using delegatecall with user-supplied inputs. If necessary, "
            "implement strict validation and whitelisting."
        ),
    },
    {
        "id": "self-destruct",
        "name": "Unprotected Self-Destruct",
        "description": "Self-destruct functionality that could be triggered by attackers.",
        "severity": Severity.CRITICAL,
        "patterns": [r"selfdestruct\s*\(", r"suicide\s*\("],
        "suggestion": (
            "Ensure self-destruct functionality is protected by proper access "
            "controls. Consider removing it if not absolutely necessary."
        ),
    },
    {
        "id": "default-visibility",
        "name": "Missing Function Visibility",
        "description": "Functions without explicit visibility default to public.",
        "severity": Severity.MEDIUM,
        # Visibility may follow other modifiers, so look ahead to the body or ';'.
        "patterns": [
            r"function\s+[a-zA-Z0-9_]+\s*\([^)]*\)"
            r"(?![^{;]*\b(?:public|private|internal|external)\b)"
        ],
        "suggestion": "Always specify function visibility (public, external, internal, private).",
    },
    {
        "id": "unchecked-math",
        "name": "Unchecked Math",
        "description": "Mathematical operations without overflow/underflow checks.",
        "severity": Severity.HIGH,
        "patterns": [r"unchecked\s*\{"],
        "suggestion": (
            "Only use unchecked blocks when you are absolutely certain "
            "overflow/underflow cannot occur. Otherwise, rely on Solidity 0.8.0+ "
            "built-in checks or SafeMath for earlier versions."
        ),
    },
    {
        "id": "arbitrary-send",
        "name": "Arbitrary Send",
        "description": "Allowing arbitrary addresses to receive Ether can lead to fund theft.",
        "severity": Severity.HIGH,
        "patterns": [
            r"\.transfer\s*\(\s*[^,)]*\)",
            r"\.send\s*\(\s*[^,)]*\)",
            r"\.call\s*\{.*value\s*:",
        ],
        "suggestion": (
            "Implement proper access controls for functions that transfer Ether. "
            "Consider using a withdrawal pattern instead of direct transfers."
        ),
    },
    {
        "id": "weak-randomness",
        "name": "Weak Randomness",
        "description": "Using predictable values for randomness can be exploited.",
        "severity": Severity.HIGH,
        "patterns": [
            r"keccak256\s*\(\s*abi\.encodePacked\s*\(\s*block\.timestamp",
            r"keccak256\s*\(\s*abi\.encodePacked\s*\(\s*.*block\.number",
        ],
        "suggestion": "Use a secure randomness source like Chainlink VRF for random number generation.",
    },
    {
        "id": "dos-gas-limit",
        "name": "DoS with Gas Limit",
        "description": "Operations in unbounded loops can cause transactions to run out of gas.",
        "severity": Severity.MEDIUM,
        "patterns": [r"for\s*\([^;]*;\s*[^;]*;\s*[^)]*\)\s*\{"],
        "suggestion": (
            "Avoid operations on unbounded arrays. Implement pull payment patterns "
            "instead of push. Consider pagination for large data sets."
        ),
    },
    {
        "id": "shadowing",
        "name": "State Variable Shadowing",
        "description": (
            "Local variables with the same name as state variables can lead to "
            "confusion and bugs."
        ),
        "severity": Severity.MEDIUM,
        "patterns": [r"^\s*[a-zA-Z0-9_]+\s+[a-zA-Z0-9_]+\s*="],
        "suggestion": (
            "Use different naming conventions for state variables vs local variables "
            '(e.g., prefix state variables with "_").'
        ),
    },
    {
        "id": "tx-gas-price",
        "name": "tx.gasprice Usage",
        "description": "Relying on tx.gasprice for logic can be manipulated by users.",
        "severity": Severity.LOW,
        "patterns": [SubstringMatcher("tx.gasprice")],
        "suggestion": (
            "Avoid using tx.gasprice for critical logic. If gas price is important, "
            "consider using a gas price oracle."
        ),
    },
    {
        "id": "assembly-usage",
        "name": "Inline Assembly Usage",
        "description": "Using inline assembly bypasses Solidity safety features.",
        "severity": Severity.MEDIUM,
        "patterns": [r"assembly\s*\{"],
        "suggestion": (
            "Minimize use of inline assembly. If necessary, thoroughly document and "
            "test assembly code."
        ),
    },
]


# ---------------------------------------------------------------------------
# Catalog construction
# ---------------------------------------------------------------------------


def _build_matchers(definition: Mapping) -> tuple[Matcher, ...]:
    return tuple(
        RegexMatcher(p) if isinstance(p, str) else p
        for p in definition.get("patterns", ())
    )


def build_catalog(definitions: Iterable[Mapping]) -> tuple[Rule, ...]:
    """Build an ordered rule catalog from declarative *definitions*.

    Each definition needs ``id``, ``name``, ``description``, ``severity``,
    ``suggestion`` and at least one entry in ``patterns``. Patterns keep
    their listed order.

    Raises:
        CatalogConfigurationError: If a pattern does not compile, a rule has
            no patterns, a field is missing, or an id is used twice.
    """
    rules: list[Rule] = []
    seen: set[str] = set()

    for definition in definitions:
        try:
            rule_id = definition["id"]
            matchers = _build_matchers(definition)
            rule = Rule(
                id=rule_id,
                name=definition["name"],
                description=definition["description"],
                severity=Severity(definition["severity"]),
                patterns=matchers,
                suggestion=definition["suggestion"],
            )
        except CatalogConfigurationError as exc:
            raise CatalogConfigurationError(
                f"Rule {definition.get('id', '?')!r}: {exc}"
            ) from exc
        except (KeyError, ValueError) as exc:
            raise CatalogConfigurationError(
                f"Malformed rule definition {definition.get('id', '?')!r}: {exc}"
            ) from exc

        if not rule.patterns:
            raise CatalogConfigurationError(f"Rule {rule_id!r} has no patterns")
        if rule_id in seen:
            raise CatalogConfigurationError(f"Duplicate rule id {rule_id!r}")

        seen.add(rule_id)
        rules.append(rule)

    logger.debug("built rule catalog with %d rule(s)", len(rules))
    return tuple(rules)


_CATALOG: tuple[Rule, ...] = build_catalog(_RULE_DEFINITIONS)
_RULES_BY_ID: dict[str, Rule] = {rule.id: rule for rule in _CATALOG}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def list_rules() -> tuple[Rule, ...]:
    """Return every catalog rule in definition order."""
    return _CATALOG


def get_rule(rule_id: str) -> Rule:
    """Return the catalog rule with *rule_id*.

    Raises:
        KeyError: If no rule has that id.
    """
    return _RULES_BY_ID[rule_id]
