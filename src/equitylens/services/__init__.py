"""equitylens services package.

Services sit around the pure analytics libraries: CSV input, super-block
combination and terminal reporting.
"""

from equitylens.services.superblock import combine_super_block

__all__: list[str] = [
    "combine_super_block",
]
