SUMMARIZE_SCENARIO_PROMPT = """You are an AI agent specializing in summarizing driving scenarios for ethical reasoning.

Given the following information about the driving scene, create a concise and human-readable summary of the ethical dilemma the car faces.

Objects: {objects}
Positions: {positions}
Signals: {signals}
Context: {context}

Respond with a JSON object of the form {{"scenario_summary": "<summary>"}}."""


EXPLAIN_DECISION_PROMPT = """You are an AI assistant designed to explain the ethical decisions of an autonomous vehicle.

Given the following information, generate a clear and concise natural language explanation of the decision:

Decision: {decision}
Reasoning: {reasoning}
Context: {context}

Respond with a JSON object of the form {{"explanation": "<explanation>"}}."""


ANALYZE_VIDEO_PROMPT = """You are the perception layer of an autonomous vehicle. The attached images are keyframes, in order, from a forward-facing camera clip of a driving scenario.

Report only what is visible:
- "objects": list drawn ONLY from {objects}
- "positions": short position labels for the objects (e.g. ahead, left_lane, sidewalk)
- "signals": list drawn ONLY from {signals}; empty if no traffic light is visible
- "context": one sentence describing the situation
- "scenario_summary": a concise summary of the ethical dilemma or situation the car is in

Respond with a single JSON object containing exactly these keys."""


def join_tags(values) -> str:
    items = [getattr(v, "value", v) for v in values]
    return ", ".join(items) if items else "none"
