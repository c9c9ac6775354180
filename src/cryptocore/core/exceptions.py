"""
Exceptions for the cryptocore primitives
Every failure a caller can act on derives from CryptoCoreError
"""


class CryptoCoreError(Exception):
    # general container for errors
    pass


class InvalidKeyLengthError(CryptoCoreError):
    # raised when an AES key is not exactly 32 bytes
    pass


class InvalidIVLengthError(CryptoCoreError):
    # raised when a CBC IV is not exactly 16 bytes
    pass


class InvalidPaddingError(CryptoCoreError):
    # raised when PKCS7 padding fails validation on decrypt
    pass


class InvalidEncodingError(CryptoCoreError):
    # raised on malformed hex / base64, or an envelope too short to hold an IV
    pass


class InsufficientDataError(CryptoCoreError):
    # raised when ciphertext is empty or not a whole number of blocks
    pass
