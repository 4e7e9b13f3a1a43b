from validators.syntax import check_elements, SyntaxReport

__all__ = ["check_elements", "SyntaxReport"]
