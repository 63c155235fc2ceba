"""Core joining logic: rule sets, context classifier, rule selector, reducer.

WHY: The core package is the only part of context-join with real logic.
Everything else (adapters, CLI, HTTP service) feeds it lines and writes its
result somewhere.

HOW: rulesets.py holds per-language marker data, context.py classifies the
region open at the end of a text, rules.py picks the joining policy for that
region, and joiner.py folds a line sequence with the pairwise join.

RULES:
- Pure functions over strings: no I/O, no shared mutable state
- Language differences are data (RuleSet), never subclasses
"""
