from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal
from typing import Optional

from clubfund.config import get_settings
from clubfund.db.models import ContributionType, FundSummary, SessionCostBreakdown, SplitResult


CONTRIBUTION_TYPE_LABELS = {
    ContributionType.DEPOSIT: "Nộp tiền",
    ContributionType.WITHDRAWAL: "Rút tiền",
    ContributionType.SESSION_PAYMENT: "Thanh toán buổi đánh",
}


def format_amount(value: float, symbol: Optional[str] = None) -> str:
    """vi-VN grouping: ``125000`` -> ``125.000đ``, ``1234.5`` -> ``1.234,5đ``."""
    if symbol is None:
        symbol = get_settings().currency_symbol

    quantized = Decimal(str(value)).quantize(Decimal("0.001"), rounding=ROUND_HALF_EVEN)
    sign = "-" if quantized < 0 else ""
    integer_part, _, fraction = f"{abs(quantized):f}".partition(".")
    grouped = f"{int(integer_part):,}".replace(",", ".")
    fraction = fraction.rstrip("0")
    text = f"{grouped},{fraction}" if fraction else grouped
    return f"{sign}{text}{symbol}"


def contribution_type_label(contribution_type: ContributionType | str) -> str:
    try:
        return CONTRIBUTION_TYPE_LABELS[ContributionType.from_str(contribution_type)]
    except ValueError:
        return str(contribution_type)


def format_split_result(result: SplitResult) -> str:
    lines = [
        f"Tổng chi phí: {format_amount(result.total_cost)}",
        f"Số người chơi: {result.total_players}",
        f"Chi phí/người: {format_amount(result.cost_per_player)}",
    ]
    for player_cost in result.player_costs:
        lines.append(f"  {player_cost.player_name}: {format_amount(player_cost.cost)}")
    return "\n".join(lines)


def format_session_breakdown(breakdown: SessionCostBreakdown) -> str:
    lines = [f"Tổng chi phí: {format_amount(breakdown.total_cost)}"]
    if breakdown.participant_count:
        lines.append(
            f"{breakdown.participant_count} người, mỗi người {format_amount(breakdown.cost_per_participant)}"
        )
    else:
        lines.append("Chưa có người tham gia")
    return "\n".join(lines)


def format_fund_summary(summary: FundSummary) -> str:
    lines = [f"Tổng quỹ: {format_amount(summary.total_fund_balance)}"]
    for balance in summary.balances:
        lines.append(
            f"  {balance.member_name}: {format_amount(balance.current_balance)}"
            f" (+{format_amount(balance.total_deposits)}"
            f" / -{format_amount(balance.total_withdrawals)}"
            f" / -{format_amount(balance.total_session_payments)})"
        )
    if summary.orphaned_contributions:
        lines.append(f"Giao dịch không rõ thành viên: {summary.orphaned_contributions}")
    if summary.skipped_contributions:
        lines.append(f"Giao dịch không hợp lệ: {summary.skipped_contributions}")
    return "\n".join(lines)
