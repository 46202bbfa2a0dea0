"""hxd - A windowed hexadecimal dump utility.

hxd reads a file, optionally restricted to a byte window, and renders its
contents as rows of hexadecimal byte values with an optional ASCII panel,
in the spirit of hexdump and xxd.
"""

__version__ = "1.0.0"
