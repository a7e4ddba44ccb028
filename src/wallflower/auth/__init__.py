"""OAuth authentication for the Flickr API."""

from wallflower.auth.oauth import AuthState, FlickrAuth, VerifierPrompt
from wallflower.auth.signing import percent_encode, sign, signature_base_string
from wallflower.auth.tokens import BlobStore, FileBlobStore, TokenStore

__all__ = [
    "AuthState",
    "BlobStore",
    "FileBlobStore",
    "FlickrAuth",
    "TokenStore",
    "VerifierPrompt",
    "percent_encode",
    "sign",
    "signature_base_string",
]
