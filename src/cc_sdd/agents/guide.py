"""Post-install next steps for each agent."""

from cc_sdd.agents.registry import get_agent_definition


def format_completion_guide(agent: str, *, kiro_dir: str) -> list[str]:
    """Build the lines of the completion guide for an agent.

    Agent-specific prepend/append steps wrap the standard three steps and
    numbering continues across all of them.
    """
    definition = get_agent_definition(agent)
    guide = definition.completion_guide
    hints = definition.commands

    steps = [
        *guide.prepend_steps,
        f"Launch {definition.label} and run {hints.steering} to create steering documents "
        f"in {kiro_dir}/steering/.",
        f"Optionally run {hints.steering_custom} for domain-specific guidance.",
        f"Start a new spec with {hints.spec}.",
        *guide.append_steps,
    ]

    lines = ["Next steps:"]
    lines.extend(f"  {number}. {step}" for number, step in enumerate(steps, start=1))
    if definition.recommended_models:
        lines.append(f"Recommended models: {', '.join(definition.recommended_models)}")
    return lines
