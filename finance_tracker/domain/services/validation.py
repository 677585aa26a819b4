"""Domain validation helpers."""

from logging import Logger

from finance_tracker.domain.models import CreditCard


def validate_card_balance(card: CreditCard, logger: Logger) -> None:
    """Warn when a card balance exceeds its credit limit.

    Over-limit balances are kept as reported by the card issuer.

    Args:
        card: Credit card to check.
        logger: Logger used for warnings.
    """
    if card.is_over_limit:
        logger.warning(
            f"Card {card.name} (****{card.last_four_digits}) balance "
            f"{card.current_balance} exceeds limit {card.credit_limit}"
        )


__all__ = ["validate_card_balance"]
