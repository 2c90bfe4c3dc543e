"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
import re

# SI prefixes are powers of 1000, IEC prefixes ("ki", "mi", ...) powers of 1024
_UNITS = {
    '': 1, 'b': 1,
    'k': 1000, 'kb': 1000,
    'm': 1000 ** 2, 'mb': 1000 ** 2,
    'g': 1000 ** 3, 'gb': 1000 ** 3,
    't': 1000 ** 4, 'tb': 1000 ** 4,
    'ki': 1024, 'kib': 1024,
    'mi': 1024 ** 2, 'mib': 1024 ** 2,
    'gi': 1024 ** 3, 'gib': 1024 ** 3,
    'ti': 1024 ** 4, 'tib': 1024 ** 4,
}

_SIZE_PATTERN = re.compile(r'^(?P<number>[+-]?\d+)\s*(?P<unit>[a-z]*)$')


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to human-readable string (e.g., 1.50KiB, 3.20MiB).
        """
        if size_bytes < 0:
            return "0B"
        if size_bytes < 1024:
            return f"{size_bytes}B"

        size = float(size_bytes)
        for unit in ["B", "KiB", "MiB", "GiB", "TiB", "PiB"]:
            if size < 1024:
                return f"{size:.2f}{unit}"
            size /= 1024
        return f"{size:.2f}EiB"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Convert human-readable size string to bytes.
        Supports plain integers and SI/IEC suffixes, case-insensitive:
        '100000', '100k', '100KB', '1MiB', '2gi', '5b'.
        Raises ValueError for negative sizes or invalid formats.
        """
        text = str(size_str).strip().lower()

        match = _SIZE_PATTERN.match(text)
        if not match:
            raise ValueError(
                f"Invalid size format: '{size_str}'. "
                f"Supported formats: 100000, 100k, 100KB, 1MiB, 2GiB, etc."
            )

        value = int(match.group('number'))
        unit = match.group('unit')

        if unit not in _UNITS:
            raise ValueError(f"Invalid size unit '{unit}' in: '{size_str}'")
        if value < 0:
            raise ValueError(f"Negative size not allowed: '{size_str}'")

        return value * _UNITS[unit]

    @staticmethod
    def is_valid_size_format(size_str: str) -> bool:
        """
        Check if the input string has a valid size format.
        """
        try:
            ConvertUtils.human_to_bytes(size_str)
            return True
        except ValueError:
            return False
