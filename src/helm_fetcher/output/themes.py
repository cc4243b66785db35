"""Verification strategy and outcome color maps."""

from helm_fetcher.models import Verification, VerificationStrategy

STRATEGY_COLORS: dict[VerificationStrategy, str] = {
    VerificationStrategy.NEVER: "dim",
    VerificationStrategy.IF_POSSIBLE: "yellow",
    VerificationStrategy.ALWAYS: "green",
    VerificationStrategy.LATER: "cyan",
}


def styled_strategy(strategy: VerificationStrategy) -> str:
    color = STRATEGY_COLORS.get(strategy, "white")
    return f"[{color}]{strategy.label}[/{color}]"


def styled_verification(verification: Verification) -> str:
    if verification:
        return "[green bold]verified[/green bold]"
    return "[dim]not verified[/dim]"
