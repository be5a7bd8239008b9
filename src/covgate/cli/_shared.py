from __future__ import annotations


def resolve_show_table(*, table: bool, no_table: bool, is_tty: bool) -> bool:
    # CLI flags take precedence over the TTY default.
    if no_table:
        return False
    if table:
        return True
    return is_tty
