"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All diagnostic messages are created here so exception constructors never
    build their own strings, and tests can assert against one source.
    """

    @staticmethod
    def invalid_language(value: str) -> Diagnostic:
        """Language subtag missing or not 2-3 letters.

        Args:
            value: The rejected language code

        Returns:
            Diagnostic for LANGUAGE_INVALID
        """
        msg = f"Invalid language code {value!r}"
        return Diagnostic(
            code=DiagnosticCode.LANGUAGE_INVALID,
            message=msg,
            hint="Use a 2-3 letter ISO 639 code such as 'en' or 'fil'",
            input_value=value,
        )

    @staticmethod
    def invalid_subtag(field: str, value: str, expected: str) -> Diagnostic:
        """Optional locale field does not match its subtag grammar.

        Args:
            field: Field name (country, script, numbering_system, calendar)
            value: The rejected value
            expected: Human-readable description of the accepted form

        Returns:
            Diagnostic for SUBTAG_INVALID
        """
        msg = f"Invalid {field} {value!r}"
        return Diagnostic(
            code=DiagnosticCode.SUBTAG_INVALID,
            message=msg,
            hint=f"Expected {expected}",
            input_value=value,
        )

    @staticmethod
    def malformed_tag(tag: str, reason: str) -> Diagnostic:
        """Encoded locale tag cannot be decoded.

        Args:
            tag: The tag being decoded
            reason: Which part of the tag was rejected

        Returns:
            Diagnostic for TAG_MALFORMED
        """
        msg = f"Malformed locale tag {tag!r}: {reason}"
        return Diagnostic(
            code=DiagnosticCode.TAG_MALFORMED,
            message=msg,
            hint="Expected language[-Script][-COUNTRY][-u[-nu-xxx][-ca-yyy]]",
            input_value=tag,
        )

    @staticmethod
    def unsupported_extension(tag: str, subtag: str) -> Diagnostic:
        """Tag carries an extension or keyword other than -u-nu- / -u-ca-.

        Args:
            tag: The tag being decoded
            subtag: The unsupported subtag

        Returns:
            Diagnostic for EXTENSION_UNSUPPORTED
        """
        msg = f"Unsupported subtag {subtag!r} in locale tag {tag!r}"
        return Diagnostic(
            code=DiagnosticCode.EXTENSION_UNSUPPORTED,
            message=msg,
            hint="Only the Unicode extension keywords 'nu' and 'ca' are supported",
            input_value=tag,
        )

    @staticmethod
    def unsupported_language(code: str, available: tuple[str, ...]) -> Diagnostic:
        """Language is not in the configured supported set.

        Args:
            code: The language code looked up
            available: Codes of the supported languages

        Returns:
            Diagnostic for LANGUAGE_UNSUPPORTED
        """
        msg = f"Language {code!r} is not supported"
        listing = ", ".join(available) if available else "none configured"
        return Diagnostic(
            code=DiagnosticCode.LANGUAGE_UNSUPPORTED,
            message=msg,
            hint=f"Supported languages: {listing}",
            input_value=code,
        )

    @staticmethod
    def storage_read_failed(key: str, reason: str) -> Diagnostic:
        """Persistence backend failed to read a slot.

        Args:
            key: Storage slot name
            reason: Underlying failure description

        Returns:
            Diagnostic for STORAGE_READ_FAILED
        """
        msg = f"Failed to read storage slot '{key}': {reason}"
        return Diagnostic(code=DiagnosticCode.STORAGE_READ_FAILED, message=msg)

    @staticmethod
    def storage_write_failed(key: str, reason: str) -> Diagnostic:
        """Persistence backend failed to write a slot.

        Args:
            key: Storage slot name
            reason: Underlying failure description

        Returns:
            Diagnostic for STORAGE_WRITE_FAILED
        """
        msg = f"Failed to write storage slot '{key}': {reason}"
        return Diagnostic(code=DiagnosticCode.STORAGE_WRITE_FAILED, message=msg)

    @staticmethod
    def initialization_in_progress() -> Diagnostic:
        """Second initialize() while one is in flight, coalescing disabled.

        Returns:
            Diagnostic for INITIALIZATION_IN_PROGRESS
        """
        return Diagnostic(
            code=DiagnosticCode.INITIALIZATION_IN_PROGRESS,
            message="Locale resolver initialization already in progress",
            hint="Await the pending initialize() call or pass coalesce=True",
        )

    @staticmethod
    def resolver_not_ready(operation: str, state: str) -> Diagnostic:
        """Mutator called before initialization completed.

        Args:
            operation: Name of the rejected operation
            state: Current resolver state

        Returns:
            Diagnostic for RESOLVER_NOT_READY
        """
        msg = f"Cannot call {operation}() while resolver is {state}"
        return Diagnostic(
            code=DiagnosticCode.RESOLVER_NOT_READY,
            message=msg,
            hint="Await LocaleResolver.initialize() before changing locale state",
        )
