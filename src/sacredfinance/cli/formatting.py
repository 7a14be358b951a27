"""Shared text formatting for CLI output."""

from decimal import Decimal

from sacredfinance.domain.entities import AccountBalance


def format_money(amount: Decimal) -> str:
    """Format an amount as $1,234.50 (negative as -$1,234.50)."""
    if amount < 0:
        return f"-${-amount:,.2f}"
    return f"${amount:,.2f}"


def balance_lines(balances: AccountBalance) -> list[str]:
    """Render the three account balances and the petty-cash ceiling."""
    return [
        f"  Bank:          {format_money(balances.bank):>14s}",
        f"  Petty Cash:    {format_money(balances.petty_cash):>14s}"
        f"  (limit {format_money(balances.petty_cash_limit)})",
        f"  Cash in Hand:  {format_money(balances.cash_in_hand):>14s}",
        f"  Total:         {format_money(balances.total):>14s}",
    ]
