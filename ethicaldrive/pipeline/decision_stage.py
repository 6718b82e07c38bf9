from ethicaldrive.models.context import Context
from ethicaldrive.reasoning.decision_engine import decide
from ethicaldrive.utils.logger import info


def run(ctx: Context) -> Context:
    if ctx.perception is None:
        return ctx

    ctx.decision = decide(ctx.perception)
    info(
        f"Decision: {ctx.decision.action.value} "
        f"(rule={ctx.decision.rule}, confidence={ctx.decision.confidence})"
    )
    return ctx
