"""Protocol constants for Flow endpoint encryption."""

# AES-128-GCM key unwrapped from encrypted_aes_key
AES_KEY_SIZE = 16

# GCM tag appended to every ciphertext, both directions
TAG_SIZE = 16

# The platform sends 16-byte IVs; 12 is the GCM-recommended minimum we accept
MIN_IV_SIZE = 12
MAX_IV_SIZE = 16

SIGNATURE_HEADER = "x-hub-signature-256"
SIGNATURE_PREFIX = "sha256="
