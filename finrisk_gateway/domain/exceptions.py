"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class RuleEvaluationError(DomainException):
    """A single rule cannot be evaluated; resolved to a verdict by the engine"""

    pass


class MissingYearError(RuleEvaluationError):
    """A year the rule compares against is absent from the series"""

    def __init__(self, year: int):
        super().__init__(f"No financial data for year {year}")
        self.year = year


class UndefinedRatioError(RuleEvaluationError):
    """A ratio divisor is zero or the ratio is not a finite number"""

    pass


class NonFiniteFigureError(RuleEvaluationError):
    """A snapshot the rule reads carries NaN or Infinity"""

    def __init__(self, year: int, figure: str):
        super().__init__(f"Figure {figure} for year {year} is not a finite number")
        self.year = year
        self.figure = figure


class ProviderAPIError(DomainException):
    """Financial data provider returned an error or is unavailable"""

    pass


class InvalidFinancialDataError(DomainException):
    """Financial statement data is malformed or invalid"""

    pass


class CompanyNotFoundError(DomainException):
    """No stored company for the given tax id"""

    pass


class YearNotFoundError(DomainException):
    """Requested fiscal year is not present in the stored series"""

    pass
