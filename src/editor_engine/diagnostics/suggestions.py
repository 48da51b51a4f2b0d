"""Fixed hint table keyed by diagnostic kind."""

from __future__ import annotations

from typing import Mapping, Optional

SUGGESTIONS: Mapping[str, str] = {
    # catalog rules
    "function_declaration": "Add a parameter list, e.g. fun name() { ... }",
    "class_declaration": "Name the class before its body: class Name { ... }",
    "java_style_declaration": "Use 'val name: Type = value' or 'var name = value'",
    "trailing_semicolon": "Remove the trailing ';'",
    "string_comparison": "Use a.equals(b) or Objects.equals(a, b)",
    "main_signature": "Declare it as public static void main(String[] args)",
    "print_statement": "Write print(value) instead of print value",
    "missing_colon": "End the block header with ':'",
    "bare_except": "Catch a specific exception, e.g. except ValueError:",
    "using_namespace_std": "Qualify names with std:: instead",
    "cout_operator": "Write std::cout << value",
    "unsafe_gets": "Use fgets(buffer, sizeof buffer, stdin)",
    "assignment_in_condition": "Compare with '==' or wrap the assignment in extra parentheses",
    # contextual checks
    "missing_include": "Add the standard I/O include at the top of the file",
    "missing_parenthesis": "Add '(' and ')' after the function name",
    "missing_initializer": "Initialize the variable with '='",
    "missing_terminator": "End the statement with ';'",
    "missing_entry_point": "Add a main method to run this class",
    "indentation": "Indent with a multiple of 4 spaces",
    # structural analyzers
    "unmatched_bracket": "Remove the bracket or add its opening pair",
    "mismatched_bracket": "Close the innermost bracket first",
    "unclosed_bracket": "Add the matching closing bracket",
    "unclosed_string": "Close the string with the same quote it opened with",
    "unclosed_comment": "Close the comment with '*/'",
}


def suggestion_for(kind: str) -> Optional[str]:
    return SUGGESTIONS.get(kind)


__all__ = ["SUGGESTIONS", "suggestion_for"]
