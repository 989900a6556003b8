"""Chess engine with interchangeable boards, move rules, move generation, material evaluation and alpha-beta search."""

__version__ = "0.1.0"