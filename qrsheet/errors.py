# qrsheet/errors.py

"""
Input-rejection errors.

These are the only exceptions raised for bad user input. Each carries the
HTTP status the API answers with; per-item problems (invalid URLs,
advisories) are flags on the records instead.
"""

from __future__ import annotations


class InputRejected(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyInputError(InputRejected):
    status_code = 400


class FileTooLargeError(InputRejected):
    status_code = 413


class UnsupportedFileError(InputRejected):
    status_code = 415


class CsvFormatError(InputRejected):
    status_code = 422


class NoCandidatesError(InputRejected):
    status_code = 422
