"""varswap.core -- public API for core types, errors and collaborators."""

from varswap.core.calendar import DEFAULT_TIME_CALCULATOR as DEFAULT_TIME_CALCULATOR
from varswap.core.calendar import WEEKDAYS as WEEKDAYS
from varswap.core.calendar import Calendar as Calendar
from varswap.core.calendar import DayCountConvention as DayCountConvention
from varswap.core.calendar import DayCountTimeCalculator as DayCountTimeCalculator
from varswap.core.calendar import HolidayCalendar as HolidayCalendar
from varswap.core.calendar import TimeCalculator as TimeCalculator
from varswap.core.calendar import year_fraction as year_fraction
from varswap.core.errors import DataInconsistencyError as DataInconsistencyError
from varswap.core.errors import FieldViolation as FieldViolation
from varswap.core.errors import UnsupportedConfigurationError as UnsupportedConfigurationError
from varswap.core.errors import ValidationError as ValidationError
from varswap.core.errors import VarSwapError as VarSwapError
from varswap.core.result import Err as Err
from varswap.core.result import Ok as Ok
from varswap.core.result import Result as Result
from varswap.core.result import sequence as sequence
from varswap.core.result import unwrap as unwrap
from varswap.core.serialization import canonical_bytes as canonical_bytes
from varswap.core.serialization import content_hash as content_hash
from varswap.core.timeseries import ObservationSeries as ObservationSeries
from varswap.core.types import Currency as Currency
from varswap.core.types import Period as Period
from varswap.core.types import PeriodFrequency as PeriodFrequency
from varswap.core.types import UtcDatetime as UtcDatetime
from varswap.core.types import add_period as add_period
