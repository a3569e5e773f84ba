"""capgen — kotlinc capability generator for Bazel rules.

Reflects over the Kotlin JVM compiler argument holder and renders every
user-facing flag, with its documentation, default and Starlark attribute
type, into a ``KOTLIN_OPTS`` declaration that build rules load directly.
"""

__version__ = "0.1.0"
