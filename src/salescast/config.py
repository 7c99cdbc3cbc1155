import math
import numbers
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from .errors import InvalidInputError

HOLIDAY_MONTHS = (11, 12)
MODELS = ('ARIMA', 'SARIMA', 'AUTO_ARIMA')


def _check_real(owner: str, name: str, v: Any, minimum: Optional[float] = None):
    if isinstance(v, bool) or not isinstance(v, numbers.Real) or not math.isfinite(v):
        raise InvalidInputError(f"{owner}.{name} must be a finite number, got {v!r}")
    if minimum is not None and v < minimum:
        raise InvalidInputError(f"{owner}.{name} must be >= {minimum}, got {v!r}")

@dataclass
class Config:
    history_anchor: str = '2021-01'
    base_sales: float = 35000
    history_growth: float = 0.05
    history_amplitude: float = 0.15
    history_holiday_boost: float = 1.3
    jitter: float = 0.2
    default_history_months: int = 36
    default_horizon: int = 12
    month_col: str = 'month'
    sales_col: str = 'sales'

    def __post_init__(self):
        for name in ('base_sales', 'history_holiday_boost', 'jitter', 'history_amplitude'):
            _check_real('Config', name, getattr(self, name), minimum=0)
        _check_real('Config', 'history_growth', self.history_growth)
        # keeps every seasonal and noise factor positive
        if self.history_amplitude >= 1:
            raise InvalidInputError(f"Config.history_amplitude must be < 1, got {self.history_amplitude!r}")
        if self.jitter >= 2:
            raise InvalidInputError(f"Config.jitter must be < 2, got {self.jitter!r}")

@dataclass
class ModelParams:
    """
    Forecast knobs. The ARIMA/seasonal orders are carried for display and
    validation only; nothing is fitted. Defaults reproduce the reference curve.
    """
    model: str = 'ARIMA'
    p: int = 2
    d: int = 1
    q: int = 2
    P: int = 1
    D: int = 1
    Q: int = 1
    s: int = 12
    base_forecast: float = 45000
    growth: float = 0.06
    seasonal_amplitude: float = 0.18
    holiday_boost: float = 1.25
    interval_base: float = 0.05
    interval_step: float = 0.01

    def __post_init__(self):
        if self.model not in MODELS:
            raise InvalidInputError(f"model must be one of {MODELS}, got {self.model!r}")
        for name in ('p', 'd', 'q', 'P', 'D', 'Q', 's'):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int) or v < 0:
                raise InvalidInputError(f"order {name} must be a non-negative integer, got {v!r}")
        if self.s < 1:
            raise InvalidInputError(f"seasonal period s must be >= 1, got {self.s}")
        for name in ('base_forecast', 'holiday_boost', 'interval_base', 'interval_step'):
            _check_real('ModelParams', name, getattr(self, name), minimum=0)
        for name in ('growth', 'seasonal_amplitude'):
            _check_real('ModelParams', name, getattr(self, name))

    @classmethod
    def from_any(cls, params: Optional[Any]) -> 'ModelParams':
        """Accept None, a ModelParams, a flat dict or the dashboard's nested {'arima':..,'seasonal':..} dict."""
        if params is None:
            return cls()
        if isinstance(params, cls):
            return params
        if not isinstance(params, Mapping):
            raise InvalidInputError(f"params must be a mapping or ModelParams, got {type(params).__name__}")
        flat = {}
        for key in ('arima', 'seasonal'):
            nested = params.get(key)
            if isinstance(nested, Mapping):
                flat.update(nested)
        flat.update({k: v for k, v in params.items() if k not in ('arima', 'seasonal')})
        known = {f.name for f in fields(cls)}
        # forecastPeriod and other UI keys are ignored
        return cls(**{k: v for k, v in flat.items() if k in known})
