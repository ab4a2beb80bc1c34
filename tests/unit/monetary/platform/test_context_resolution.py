from collections import Counter
from concurrent.futures import ThreadPoolExecutor

import pytest

from monetary.domain.amount.fast_money import FastMoney
from monetary.domain.context.monetary_context import AmountKind, FAST_MONEY_CONTEXT
from monetary.domain.context.rounding_mode import RoundingMode
from monetary.platform.context_resolution import (
    configure_settings,
    DEFAULT_PRECISION,
    FALLBACK_CONTEXT,
    get_default_context,
    is_fast_money_scale_enforced,
    resolve_context,
)
from monetary.platform.settings import (
    EnvironmentSettings,
    FAST_MONEY_ENFORCE_SCALE_KEY,
    MappingSettings,
    MONEY_DEFAULT_MATH_CONTEXT_KEY,
    MONEY_DEFAULT_PRECISION_KEY,
    MONEY_DEFAULT_ROUNDING_MODE_KEY,
)


class CountingSettings(MappingSettings):
    """Records how often each key is read."""

    def __init__(self, values=None):
        super().__init__(values)
        self.reads = Counter()

    def get(self, key):
        self.reads[key] += 1
        return super().get(key)


@pytest.fixture(autouse=True)
def restore_settings():
    yield
    configure_settings(EnvironmentSettings())


def test_built_in_default_without_settings():
    context = resolve_context(AmountKind.MONEY, MappingSettings())
    assert context == FALLBACK_CONTEXT
    assert context.precision == DEFAULT_PRECISION
    assert context.rounding_mode == RoundingMode.HALF_EVEN


def test_precision_and_rounding_mode_from_settings():
    settings = MappingSettings({MONEY_DEFAULT_PRECISION_KEY: "20", MONEY_DEFAULT_ROUNDING_MODE_KEY: "half_even"})
    context = resolve_context(AmountKind.MONEY, settings)
    assert context.precision == 20
    assert context.rounding_mode == RoundingMode.HALF_EVEN


def test_precision_without_rounding_mode_rounds_half_up():
    context = resolve_context(AmountKind.MONEY, MappingSettings({MONEY_DEFAULT_PRECISION_KEY: "12"}))
    assert context.precision == 12
    assert context.rounding_mode == RoundingMode.HALF_UP


def test_named_math_context_from_settings():
    context = resolve_context(AmountKind.MONEY, MappingSettings({MONEY_DEFAULT_MATH_CONTEXT_KEY: "decimal32"}))
    assert context.precision == 7
    assert context.rounding_mode == RoundingMode.HALF_EVEN


@pytest.mark.parametrize(
    "values",
    [
        {MONEY_DEFAULT_PRECISION_KEY: "abc"},
        {MONEY_DEFAULT_PRECISION_KEY: "-3"},
        {MONEY_DEFAULT_PRECISION_KEY: "10", MONEY_DEFAULT_ROUNDING_MODE_KEY: "NEAREST"},
        {MONEY_DEFAULT_MATH_CONTEXT_KEY: "DECIMAL256"},
    ],
)
def test_broken_settings_fall_back_to_built_in_default(values):
    assert resolve_context(AmountKind.MONEY, MappingSettings(values)) == FALLBACK_CONTEXT


def test_default_contexts_per_kind():
    configure_settings(MappingSettings({MONEY_DEFAULT_PRECISION_KEY: "30"}))

    rounded_context = get_default_context(AmountKind.ROUNDED_MONEY)
    assert rounded_context.precision == 30
    assert rounded_context.amount_kind == AmountKind.ROUNDED_MONEY
    assert get_default_context(AmountKind.FAST_MONEY) is FAST_MONEY_CONTEXT


def test_default_context_is_resolved_once_and_cached():
    configure_settings(MappingSettings({MONEY_DEFAULT_PRECISION_KEY: "40"}))

    with ThreadPoolExecutor(max_workers=8) as executor:
        contexts = list(executor.map(lambda _: get_default_context(AmountKind.MONEY), range(32)))

    assert contexts[0].precision == 40
    assert all(context is contexts[0] for context in contexts)


def test_configure_settings_forgets_cached_contexts():
    configure_settings(MappingSettings({MONEY_DEFAULT_PRECISION_KEY: "40"}))
    assert get_default_context(AmountKind.MONEY).precision == 40

    configure_settings(MappingSettings({MONEY_DEFAULT_PRECISION_KEY: "16"}))
    assert get_default_context(AmountKind.MONEY).precision == 16


def test_scale_enforcement_flag_is_read_once():
    settings = CountingSettings()
    configure_settings(settings)

    amount = FastMoney.of(1, "USD")
    for _ in range(100):
        amount.divide("0.0000003")

    assert settings.reads[FAST_MONEY_ENFORCE_SCALE_KEY] == 1


def test_configure_settings_forgets_scale_enforcement_flag():
    configure_settings(MappingSettings({FAST_MONEY_ENFORCE_SCALE_KEY: "true"}))
    assert is_fast_money_scale_enforced()

    configure_settings(MappingSettings())
    assert not is_fast_money_scale_enforced()
