"""
Core Package.

Contains the compilation logic:
- Template tokenizer, parser and emitter (`core.template`)
- LibCST expander for marker calls in Python modules
- Expansion engine and inline `template()` evaluation
"""
