"""Python models of a small teaching Unix kernel's MMU, paging, ELF headers, shell parser, allocator, locks and wc tool."""

__version__ = "0.1.0"