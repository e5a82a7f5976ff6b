# src/journal/trade_evaluator.py
"""Derives P&L, risk/reward and outcome for a closed trade."""
from src.journal.models import TradeDirection, TradeEvaluation, TradeStatus

# Monetary value of a one-point move on one lot
CONTRACT_MULTIPLIER = 1000.0


def evaluate_trade(
    direction: TradeDirection,
    lot_size: float,
    entry_price: float,
    exit_price: float,
    stop_loss: float,
    take_profit: float,
    contract_multiplier: float = CONTRACT_MULTIPLIER,
) -> TradeEvaluation:
    """Compute the derived values of a trade.

    The evaluation is total over numeric input: nonsensical economics such as
    a zero lot size are the caller's concern and simply flow through.

    Args:
        direction: Buy or Sell.
        lot_size: Position size in lots.
        entry_price: Fill price on entry.
        exit_price: Fill price on exit.
        stop_loss: Planned stop price.
        take_profit: Planned target price.
        contract_multiplier: Money per point per lot.

    Returns:
        TradeEvaluation with result, risk_reward and status.
    """
    if direction == TradeDirection.BUY:
        result = (exit_price - entry_price) * lot_size * contract_multiplier
    else:
        result = (entry_price - exit_price) * lot_size * contract_multiplier

    risk = abs(entry_price - stop_loss)
    reward = abs(take_profit - entry_price)
    risk_reward = reward / risk if risk > 0 else 0.0

    return TradeEvaluation(
        result=result,
        risk_reward=risk_reward,
        status=classify_result(result),
    )


def classify_result(result: float) -> TradeStatus:
    """Map a signed trade result to its outcome."""
    if result > 0:
        return TradeStatus.WIN
    elif result < 0:
        return TradeStatus.LOSS
    else:
        return TradeStatus.BREAKEVEN
