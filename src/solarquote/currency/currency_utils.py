import enum

from ..quote_utils import coerce_signed, scale_half_up

USD_TO_PKR = 280  # approximate rate used for display


class CurrencyCode(enum.Enum):
    PKR = "PKR"
    USD = "USD"


CURRENCY_PREFIX = {
    CurrencyCode.PKR: 'Rs. ',
    CurrencyCode.USD: '$',
}


def _as_currency(currency) -> CurrencyCode:
    return currency if isinstance(currency, CurrencyCode) else CurrencyCode(str(currency).upper())


def format_amount(amount) -> str:
    """Group thousands and keep at most three decimals, dropping trailing zeros."""
    amount = coerce_signed(amount, field='amount')
    if isinstance(amount, int):
        return f"{amount:,}"
    text = f"{amount:,.3f}".rstrip('0').rstrip('.')
    return '0' if text == '-0' else text


def format_currency(amount, currency=CurrencyCode.PKR) -> str:
    """
    Display an amount in the given currency, e.g. "Rs. 1,150,000" or "$4,107".
    No conversion happens here; see convert_amount.
    """
    return CURRENCY_PREFIX[_as_currency(currency)] + format_amount(amount)


def convert_amount(amount, to_currency, from_currency=CurrencyCode.PKR, exchange_rate: float = USD_TO_PKR):
    """
    Convert between PKR and USD at `exchange_rate` PKR per USD, rounding to whole units.
    Amounts already in the target currency are returned unchanged.
    """
    to_currency = _as_currency(to_currency)
    from_currency = _as_currency(from_currency)
    if to_currency == from_currency:
        return amount
    amount = coerce_signed(amount, field='amount')
    if from_currency == CurrencyCode.PKR and to_currency == CurrencyCode.USD:
        return scale_half_up(amount, 1, divisor=exchange_rate)
    return scale_half_up(amount, exchange_rate)
