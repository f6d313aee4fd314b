"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45", "US$ 123.45", "u$s123"
    - "1,234.56" (comma thousands)
    - "1.234,56" (dot thousands, comma decimals)
    - "1234,56"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Remove currency markers
    amount_str = re.sub(r"(?i)(us\$|u\$s|usd|ars|\$)", "", amount_str).strip()

    if "," in amount_str and "." in amount_str:
        if amount_str.rfind(",") > amount_str.rfind("."):
            # 1.234,56
            amount_str = amount_str.replace(".", "").replace(",", ".")
        else:
            # 1,234.56
            amount_str = amount_str.replace(",", "")
    elif "," in amount_str:
        head, _, tail = amount_str.rpartition(",")
        if len(tail) == 3 and head:
            # 1,234 as thousands
            amount_str = amount_str.replace(",", "")
        else:
            amount_str = amount_str.replace(",", ".")

    amount_str = amount_str.replace(" ", "")

    try:
        return Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
