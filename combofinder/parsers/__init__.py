from combofinder.parsers.decklist import parse_decklist, parse_decklist_lines

__all__ = [
    "parse_decklist",
    "parse_decklist_lines",
]
