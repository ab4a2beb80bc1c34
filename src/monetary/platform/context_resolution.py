from __future__ import annotations

import logging
from threading import Lock

from monetary.domain.context.math_context import NAMED_MATH_CONTEXTS
from monetary.domain.context.monetary_context import AmountKind, FAST_MONEY_CONTEXT, MonetaryContext
from monetary.domain.context.rounding_mode import RoundingMode
from monetary.platform.settings import (
    EnvironmentSettings,
    FAST_MONEY_ENFORCE_SCALE_KEY,
    get_bool,
    MONEY_DEFAULT_MATH_CONTEXT_KEY,
    MONEY_DEFAULT_PRECISION_KEY,
    MONEY_DEFAULT_ROUNDING_MODE_KEY,
    SettingsSource,
)

logger = logging.getLogger(__name__)

# Built-in default for the arbitrary-precision kinds; also the fallback when settings are broken
DEFAULT_PRECISION = 64
DEFAULT_ROUNDING_MODE = RoundingMode.HALF_EVEN
FALLBACK_CONTEXT = MonetaryContext(precision=DEFAULT_PRECISION, rounding_mode=DEFAULT_ROUNDING_MODE, amount_kind=AmountKind.MONEY)

# Module-level state for the populate-once cache
_settings: SettingsSource = EnvironmentSettings()
_default_contexts: dict[AmountKind, MonetaryContext] = {}
_scale_enforcement: bool | None = None
_lock = Lock()


def configure_settings(settings: SettingsSource) -> None:
    """Replace the settings source and forget all cached defaults.

    Intended for application bootstrap and tests; amounts created earlier keep their context.
    """
    global _settings, _scale_enforcement
    with _lock:
        _settings = settings
        _default_contexts.clear()
        _scale_enforcement = None
    logger.debug(f"Configured settings source {settings.__class__.__name__}; default contexts will be resolved again")


def is_fast_money_scale_enforced() -> bool:
    """Whether `FastMoney` rejects operands with more than 5 fraction digits.

    Reads `monetary.fast_money.enforce_scale_compatibility` on first access only.
    """
    global _scale_enforcement
    enforced = _scale_enforcement
    if enforced is not None:
        return enforced

    resolved = get_bool(_settings, FAST_MONEY_ENFORCE_SCALE_KEY)
    with _lock:
        if _scale_enforcement is None:
            _scale_enforcement = resolved
            logger.info(f"FastMoney scale compatibility enforcement: {resolved}")
        return _scale_enforcement


def get_default_context(kind: AmountKind) -> MonetaryContext:
    """Return the default context of $kind, resolving it on first access.

    Settings are read at most once per kind. Concurrent first accesses converge on a single
    cached instance: whoever inserts first wins and everyone else reuses that value.

    Args:
        kind: Amount kind whose default context is requested.

    Returns:
        The cached `MonetaryContext`. Never raises because of bad settings.
    """
    context = _default_contexts.get(kind)
    if context is not None:
        return context

    resolved = resolve_context(kind, _settings)
    with _lock:
        return _default_contexts.setdefault(kind, resolved)


def resolve_context(kind: AmountKind, settings: SettingsSource) -> MonetaryContext:
    """Build the default context of $kind from $settings without caching it."""
    match kind:
        case AmountKind.FAST_MONEY:
            return FAST_MONEY_CONTEXT
        case AmountKind.ROUNDED_MONEY:
            return resolve_context(AmountKind.MONEY, settings).with_kind(AmountKind.ROUNDED_MONEY)
        case _:
            return _resolve_money_context(settings)


def _resolve_money_context(settings: SettingsSource) -> MonetaryContext:
    try:
        precision_value = settings.get(MONEY_DEFAULT_PRECISION_KEY)
        if precision_value is not None:
            return _create_context_with_precision(settings, int(precision_value))
        return _create_context_from_math_context(settings)
    except Exception as e:
        logger.error(f"Error evaluating default monetary context, using default (precision={DEFAULT_PRECISION}, rounding_mode={DEFAULT_ROUNDING_MODE.name}): {e}")
        return FALLBACK_CONTEXT


def _create_context_with_precision(settings: SettingsSource, precision: int) -> MonetaryContext:
    rounding_value = settings.get(MONEY_DEFAULT_ROUNDING_MODE_KEY)
    rounding_mode = RoundingMode.from_str(rounding_value) if rounding_value is not None else RoundingMode.HALF_UP
    context = MonetaryContext(precision=precision, rounding_mode=rounding_mode, amount_kind=AmountKind.MONEY)
    logger.info(f"Using custom monetary context: precision={precision}, rounding_mode={rounding_mode.name}")
    return context


def _create_context_from_math_context(settings: SettingsSource) -> MonetaryContext:
    name = settings.get(MONEY_DEFAULT_MATH_CONTEXT_KEY)
    if name is None:
        logger.info(f"Using default monetary context: precision={DEFAULT_PRECISION}, rounding_mode={DEFAULT_ROUNDING_MODE.name}")
        return FALLBACK_CONTEXT

    math_context = NAMED_MATH_CONTEXTS.get(name.strip().upper())
    if math_context is None:
        logger.warning(f"Found invalid math context $name '{name}', using default (precision={DEFAULT_PRECISION}, rounding_mode={DEFAULT_ROUNDING_MODE.name})")
        return FALLBACK_CONTEXT

    logger.info(f"Using math context {name.strip().upper()} ({math_context})")
    return MonetaryContext.of(math_context, AmountKind.MONEY)
