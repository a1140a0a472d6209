"""
Rules package.

Defines the rule model, the rule source that orders global and endpoint
rules, and the resolution engine that folds an ordered rule list into a
single decision (False, True, or a conditions dict).

Modules of interest:
- models: Rule, AclConfig and decision helpers.
- source: Global rules followed by endpoint rules.
- engine: Sequential resolution with condition merging.
- loader: YAML/JSON config files.
"""
