#!/usr/bin/env python3
"""
Example: Basic usage of polymetrics as a Python library
"""

from polymetrics import analyze
from polymetrics.architecture.metrics import zone_of_pain

# Analyze a workspace
result = analyze("/path/to/workspace", report_all_units=False)

# Print metrics, worst distance first
for m in result.metrics:
    distance = "-" if m.distance is None else f"{m.distance:.2f}"
    print(f"{m.name:<24} Ca={m.afferent_coupling} Ce={m.efferent_coupling} "
          f"I={m.instability:.2f} D={distance}")

for cycle in result.cycles:
    print("Cycle: " + " -> ".join([*cycle, cycle[0]]))

for m in zone_of_pain(result.metrics):
    print(f"{m.name} is stable but leaks its implementation")

print(f"Analysis complete: {result.health.unit_count} unit(s), "
      f"mean distance {result.health.mean_distance:.3f}, "
      f"{'healthy' if result.healthy else 'needs attention'}")
