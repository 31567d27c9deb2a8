"""Plain-English explanations of unit metrics for the detail view."""

from typing import Optional

from ..architecture.models import UnitMetrics


def describe_instability(i: float, ce: int, ca: int) -> str:
    if ca + ce == 0:
        return "This unit is isolated: nothing depends on it and it depends on nothing."
    if i < 0.2:
        return (
            f"Very stable (I={i:.2f}). {ca} other units depend on this, but it only "
            f"depends on {ce} others. Changes here could break many things, so be careful."
        )
    if i < 0.4:
        return (
            f"Mostly stable (I={i:.2f}). More units depend on this ({ca}) than it "
            f"depends on ({ce}). Treat changes with care."
        )
    if i < 0.6:
        return (
            f"Balanced (I={i:.2f}). Similar number of incoming ({ca}) and "
            f"outgoing ({ce}) dependencies."
        )
    if i < 0.8:
        return (
            f"Mostly unstable (I={i:.2f}). Depends on {ce} units but only {ca} "
            "depend on it. Easier to change safely."
        )
    return (
        f"Very unstable (I={i:.2f}). Depends on {ce} units but only {ca} depend on it. "
        "This is a leaf unit, easy to change without breaking others."
    )


def describe_abstractness(m: UnitMetrics) -> str:
    """Explain how other units reach into this one."""
    if m.abstractness is None:
        if m.is_entry_point:
            return "Not measured: entry points are consumed from outside the workspace."
        return "Not measured: this kind of unit has no interface modules."

    interface, leaky = m.interface_modules, m.leaky_modules
    if interface == 0 and leaky == 0:
        return "No other units require this one's modules directly."
    if leaky == 0:
        return "All external access goes through the interface. Clean!"
    if interface == 0:
        return "All external access is to implementation modules. No interface!"
    return f"{m.abstractness * 100:.0f}% of external access goes through the interface."


def describe_distance(d: Optional[float], a: Optional[float], i: float) -> str:
    if d is None or a is None:
        return "Not measured."
    if a >= 0.99:
        return f"Excellent (D={d:.2f}). All external access goes through the interface."
    if d < 0.1:
        return f"Excellent (D={d:.2f}). This unit is well-balanced."
    if d < 0.3:
        return f"Good (D={d:.2f}). Close to the ideal balance."
    if i < 0.3 and a >= 0.8:
        return (
            f"Good (D={d:.2f}). This stable unit has clean abstraction: most access "
            "is through the interface."
        )
    if d < 0.5:
        return f"Fair (D={d:.2f}). Some room for improvement."
    if i < 0.5 and a < 0.5:
        return (
            f"Poor (D={d:.2f}). Leaky abstraction: other units require implementation "
            "modules directly instead of going through the interface. This couples "
            "them to your internals."
        )
    if a < 0.1:
        return (
            f"Poor (D={d:.2f}). Other units require implementation modules directly. "
            "There's no interface protecting your internals."
        )
    if i > 0.7 and a > 0.7:
        return (
            f"Unusual (D={d:.2f}). Highly abstract but unstable. The interface is "
            "clean, but this unit depends on many others."
        )
    return (
        f"Needs attention (D={d:.2f}). Consider whether external access should go "
        "through interface modules."
    )


def describe_overall_health(m: UnitMetrics) -> str:
    """One-line assessment of a unit."""
    if m.is_entry_point:
        return "This is an entry point: it wires other units together and nothing inside depends on it."
    if m.abstractness is None:
        return "This unit is not measured for abstraction; only its coupling is reported."

    interface, leaky = m.interface_modules, m.leaky_modules
    if interface == 0 and leaky == 0:
        if m.instability > 0.7:
            return "This is a leaf unit: nothing else depends on it."
        return "This unit's modules aren't required by other units."
    if leaky == 0:
        return "This unit is well-designed. All external access goes through the interface."
    if m.instability < 0.3:
        return (
            f"Issues: leaky abstraction. {leaky} implementation module(s) are required "
            "directly by other units. Consider routing access through interface modules."
        )
    return (
        f"Minor issue: {leaky} implementation module(s) are required externally. "
        "Since this unit is unstable, it's less critical."
    )
