"""twofactor.crypto -- cryptographic primitives used by twofactor"""
