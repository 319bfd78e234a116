# qrsheet/__init__.py

"""
QR Sheet: printable, numbered QR codes for lists of referral links.

The HTTP app lives in qrsheet.main; the pieces with real logic are
url_validator, sanitizer, csv_extractor and collator.
"""
