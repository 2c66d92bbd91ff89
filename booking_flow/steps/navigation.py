"""Navigation steps - forward and back between wizard steps."""

from typing import Dict, Any


def advance(ctx: Dict[str, Any], driver) -> None:
    driver.advance()
    ctx['booking.advances'] = ctx.get('booking.advances', 0) + 1


def go_back(ctx: Dict[str, Any], driver) -> None:
    driver.back()
    ctx['booking.backs'] = ctx.get('booking.backs', 0) + 1
