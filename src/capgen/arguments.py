"""Kotlin JVM compiler argument holder.

Mirrors the layout of kotlinc's own argument classes: a chain of dataclasses
(``CommonToolArguments`` -> ``CommonCompilerArguments`` ->
``K2JVMCompilerArguments``) where each flag is a field carrying
:class:`Argument` metadata.  Fields without that metadata are internal state
and never surface as flags.

Declare a flag with :func:`argument`::

    @dataclass
    class MyArguments:
        werror: bool = argument("-Werror", "Report an error if there are any warnings.", default=False)
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, NamedTuple

ARGUMENT_METADATA_KEY = "argument"


@dataclass(frozen=True)
class Argument:
    """Flag metadata attached to an argument-holder field."""

    value: str
    description: str
    value_description: str = ""


def argument(
    value: str,
    description: str,
    *,
    default: Any = None,
    default_factory: Any = dataclasses.MISSING,
    value_description: str = "",
) -> Any:
    """Declare a dataclass field that backs the compiler flag *value*."""
    metadata = {ARGUMENT_METADATA_KEY: Argument(value, description, value_description)}
    if default_factory is not dataclasses.MISSING:
        return dataclasses.field(default_factory=default_factory, metadata=metadata)
    return dataclasses.field(default=default, metadata=metadata)


def argument_of(f: dataclasses.Field) -> Argument | None:
    """Return the :class:`Argument` carried by *f*, if any."""
    meta = f.metadata.get(ARGUMENT_METADATA_KEY)
    return meta if isinstance(meta, Argument) else None


class LanguageVersion(NamedTuple):
    major: int
    minor: int

    @property
    def version_string(self) -> str:
        return f"{self.major}.{self.minor}"


LATEST_STABLE = LanguageVersion(2, 1)


@dataclass
class CommonToolArguments:
    help: bool = argument("-help", "Print a synopsis of standard options.", default=False)
    extra_help: bool = argument("-X", "Print a synopsis of advanced options.", default=False)
    version: bool = argument("-version", "Display the compiler version.", default=False)
    verbose: bool = argument("-verbose", "Enable verbose logging output.", default=False)
    suppress_warnings: bool = argument("-nowarn", "Don't generate any warnings.", default=False)
    all_warnings_as_errors: bool = argument(
        "-Werror", "Report an error if there are any warnings.", default=False
    )
    extra_warnings: bool = argument(
        "-Wextra", "Enable extra checkers for K2.", default=False
    )
    # Populated by the command-line parser, not a flag.
    free_args: list[str] = dataclasses.field(default_factory=list)


@dataclass
class CommonCompilerArguments(CommonToolArguments):
    language_version: str | None = argument(
        "-language-version",
        "Provide source compatibility with the specified version of Kotlin.",
        value_description="<version>",
    )
    api_version: str | None = argument(
        "-api-version",
        "Allow using declarations from only the specified version of bundled libraries.",
        value_description="<version>",
    )
    kotlin_home: str | None = argument(
        "-kotlin-home",
        "Path to the Kotlin compiler home directory used for the discovery of runtime libraries.",
        value_description="<path>",
    )
    progressive_mode: bool = argument(
        "-progressive",
        "Enable progressive compiler mode.\n"
        "In this mode, deprecations and bug fixes for unstable code take effect immediately\n"
        "instead of going through a graceful migration cycle.",
        default=False,
    )
    script: bool = argument("-script", "Evaluate the given Kotlin script (*.kts) file.", default=False)
    opt_in: list[str] | None = argument(
        "-opt-in",
        "Enable API usages that require opt-in with an opt-in requirement marker with the given fully qualified name.",
        value_description="<fq.name>",
    )
    plugin_options: list[str] | None = argument(
        "-P",
        "Pass an option to a plugin.",
        value_description="plugin:<pluginId>:<optionName>=<value>",
    )
    plugin_classpaths: list[str] | None = argument(
        "-Xplugin", "Load plugins from the given classpath.", value_description="<path>"
    )
    plugin_configurations: list[str] | None = argument(
        "-Xcompiler-plugin",
        "Register a compiler plugin.",
        value_description="<path1>,<path2>[=<optionName>=<value>,<optionName>=<value>]",
    )
    no_inline: bool = argument("-Xno-inline", "Disable method inlining.", default=False)
    skip_metadata_version_check: bool = argument(
        "-Xskip-metadata-version-check",
        "Allow loading classes with bad metadata versions and pre-release classes.",
        default=False,
    )
    skip_prerelease_check: bool = argument(
        "-Xskip-prerelease-check", "Allow loading pre-release classes.", default=False
    )
    allow_kotlin_package: bool = argument(
        "-Xallow-kotlin-package",
        "Allow compiling code in the 'kotlin' package, and allow not requiring 'kotlin.stdlib' in 'module-info'.",
        default=False,
    )
    report_output_files: bool = argument(
        "-Xreport-output-files", "Report the source-to-output file mapping.", default=False
    )
    multi_platform: bool = argument(
        "-Xmulti-platform", "Enable language support for multiplatform projects.", default=False
    )
    no_check_actual: bool = argument(
        "-Xno-check-actual", "Do not check for the presence of the 'actual' modifier in multiplatform projects.", default=False
    )
    intellij_plugin_root: str | None = argument(
        "-Xintellij-plugin-root",
        "Path to 'kotlin-compiler.jar' or the directory where the IntelliJ IDEA configuration files can be found.",
        value_description="<path>",
    )
    explicit_api: str = argument(
        "-Xexplicit-api",
        "Force the compiler to report errors on all public API declarations without an explicit visibility or a return type.\n"
        "Use the 'warning' level to issue warnings instead of errors.",
        default="disable",
        value_description="{strict|warning|disable}",
    )
    context_receivers: bool = argument(
        "-Xcontext-receivers", "Enable experimental context receivers.", default=False
    )
    dump_perf: str | None = argument(
        "-Xdump-perf",
        "Dump detailed performance statistics to the specified file.",
        value_description="<path>",
    )
    suppress_version_warnings: bool = argument(
        "-Xsuppress-version-warnings",
        "Suppress warnings about outdated, inconsistent, or experimental language or API versions.",
        default=False,
    )
    enable_incremental_compilation: bool = argument(
        "-Xenable-incremental-compilation", "Enable incremental compilation.", default=False
    )
    render_internal_diagnostic_names: bool = argument(
        "-Xrender-internal-diagnostic-names",
        "Render the internal names of warnings and errors.",
        default=False,
    )


@dataclass
class K2JVMCompilerArguments(CommonCompilerArguments):
    destination: str | None = argument(
        "-d",
        "Destination for generated class files.",
        value_description="<directory|jar>",
    )
    classpath: str | None = argument(
        "-classpath",
        "List of directories and JAR/ZIP archives to search for user class files.",
        value_description="<path>",
    )
    include_runtime: bool = argument(
        "-include-runtime", "Include the Kotlin runtime in the resulting JAR.", default=False
    )
    jdk_home: str | None = argument(
        "-jdk-home",
        "Include a custom JDK from the specified location in the classpath instead of the default 'JAVA_HOME'.",
        value_description="<path>",
    )
    no_jdk: bool = argument(
        "-no-jdk", "Don't automatically include the Java runtime in the classpath.", default=False
    )
    no_stdlib: bool = argument(
        "-no-stdlib",
        "Don't automatically include the Kotlin/JVM stdlib and Kotlin reflection dependencies in the classpath.",
        default=False,
    )
    no_reflect: bool = argument(
        "-no-reflect",
        "Don't automatically include the Kotlin reflection dependency in the classpath.",
        default=False,
    )
    expression: str | None = argument(
        "-expression", "Evaluate the given string as a Kotlin script.", value_description="<expression>"
    )
    script_templates: list[str] | None = argument(
        "-script-templates",
        "Script definition template classes.",
        value_description="<fully qualified class name[,]>",
    )
    module_name: str | None = argument(
        "-module-name", "Name of the generated '.kotlin_module' file.", value_description="<name>"
    )
    jvm_target: str | None = argument(
        "-jvm-target",
        "The target version of the generated JVM bytecode (1.8 and 9-23), with 1.8 as the default.",
        value_description="<version>",
    )
    java_parameters: bool = argument(
        "-java-parameters",
        "Generate metadata for Java 1.8 reflection on method parameters.",
        default=False,
    )
    jsr305: list[str] | None = argument(
        "-Xjsr305",
        'Specify the behavior of \'JSR-305\' nullability annotations:\n'
        '-Xjsr305={ignore/strict/warn}        global (all non-@UnderMigration annotations)\n'
        '-Xjsr305=under-migration:{ignore/strict/warn}  all @UnderMigration annotations\n'
        '-Xjsr305=@<fq.name>:{ignore/strict/warn}  annotation with the given fully qualified class name\n'
        "Modes:\n"
        '* ignore\n'
        '* strict (experimental; treat like other supported nullability annotations)\n'
        '* warn (report a warning)',
        value_description='{ignore/strict/warn}|under-migration:{ignore/strict/warn}|@<fq.name>:{ignore/strict/warn}',
    )
    jvm_default: str = argument(
        "-Xjvm-default",
        "Emit JVM default methods for interface declarations with bodies. The default is 'disable'.",
        default="disable",
        value_description="{all|all-compatibility|disable}",
    )
    lambdas: str | None = argument(
        "-Xlambdas",
        'Select the code generation scheme for lambdas.\n'
        '-Xlambdas=indy                  Generate lambdas using "invokedynamic" with "LambdaMetafactory.metafactory".\n'
        '-Xlambdas=class                 Generate lambdas as explicit classes.',
        value_description="{class|indy}",
    )
    sam_conversions: str | None = argument(
        "-Xsam-conversions",
        "Select the code generation scheme for SAM conversions.",
        value_description="{class|indy}",
    )
    string_concat: str | None = argument(
        "-Xstring-concat",
        "Select the code generation scheme for string concatenation.",
        value_description="{indy-with-constants|indy|inline}",
    )
    no_optimize: bool = argument("-Xno-optimize", "Disable optimizations.", default=False)
    no_param_assertions: bool = argument(
        "-Xno-param-assertions",
        "Don't generate not-null assertions for parameters of methods accessible from Java.",
        default=False,
    )
    no_call_assertions: bool = argument(
        "-Xno-call-assertions",
        "Don't generate not-null assertions for arguments of platform types.",
        default=False,
    )
    no_receiver_assertions: bool = argument(
        "-Xno-receiver-assertions",
        "Don't generate not-null assertions for extension receiver arguments of platform types.",
        default=False,
    )
    debug: bool = argument(
        "-Xdebug",
        "Enable debug mode for compilation.\n"
        "Currently this includes spilling all variables in a suspending context regardless of whether they are alive.",
        default=False,
    )
    emit_jvm_type_annotations: bool = argument(
        "-Xemit-jvm-type-annotations",
        "Emit JVM type annotations in bytecode.",
        default=False,
    )
    use_fast_jar_file_system: bool = argument(
        "-Xuse-fast-jar-file-system", "Use the fast implementation of Jar FS.", default=False
    )
    build_file: str | None = argument(
        "-Xbuild-file", "Path to the .xml build file to compile.", value_description="<path>"
    )
    declarations_output_path: str | None = argument(
        "-Xdump-declarations-to",
        "Path to the JSON file to dump Java to Kotlin declaration mappings.",
        value_description="<path>",
    )
    dump_directory: str | None = argument(
        "-Xdump-directory", "Dump the backend state into this directory.", value_description="<path>"
    )
    dump_only_fq_name: str | None = argument(
        "-Xdump-fqname",
        "Dump the declaration with the given FqName into the directory given by -Xdump-directory.",
        value_description="<FqName>",
    )
    friend_paths: list[str] | None = argument(
        "-Xfriend-paths",
        "Paths to output directories for friend modules (modules whose internals should be visible).",
        value_description="<path>",
    )
    sanitize_parentheses: bool = argument(
        "-Xsanitize-parentheses",
        "Transform '(' and ')' in method names to some other character sequence.\n"
        "This mode can BREAK BINARY COMPATIBILITY and should only be used as a workaround for\n"
        "problems with parentheses in identifiers on certain platforms.",
        default=False,
    )
    add_modules: list[str] | None = argument(
        "-Xadd-modules",
        "Root modules to resolve in addition to the initial modules, or all modules on the module path if <module> is ALL-MODULE-PATH.",
        value_description="<module[,]>",
    )
