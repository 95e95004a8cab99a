"""Known-answer test vectors for AES block encryption, key expansion and CBC."""

# FIPS-197 Appendix C plus NIST single-block vectors
FIPS_197_TEST_VECTORS = [
    # Appendix C.1 - AES-128
    {
        "key": bytes.fromhex("000102030405060708090a0b0c0d0e0f"),
        "plaintext": bytes.fromhex("00112233445566778899aabbccddeeff"),
        "ciphertext": bytes.fromhex("69c4e0d86a7b0430d8cdb78070b4c55a"),
    },
    # Appendix C.2 - AES-192
    {
        "key": bytes.fromhex("000102030405060708090a0b0c0d0e0f1011121314151617"),
        "plaintext": bytes.fromhex("00112233445566778899aabbccddeeff"),
        "ciphertext": bytes.fromhex("dda97ca4864cdfe06eaf70a0ec0d7191"),
    },
    # Appendix C.3 - AES-256
    {
        "key": bytes.fromhex(
            "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f"
        ),
        "plaintext": bytes.fromhex("00112233445566778899aabbccddeeff"),
        "ciphertext": bytes.fromhex("8ea2b7ca516745bfeafc49904b496089"),
    },
    # Appendix B - AES-128
    {
        "key": bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c"),
        "plaintext": bytes.fromhex("3243f6a8885a308d313198a2e0370734"),
        "ciphertext": bytes.fromhex("3925841d02dc09fbdc118597196a0b32"),
    },
    # Additional test vectors from NIST
    {
        "key": bytes.fromhex("00000000000000000000000000000000"),
        "plaintext": bytes.fromhex("00000000000000000000000000000000"),
        "ciphertext": bytes.fromhex("66e94bd4ef8a2c3b884cfa59ca342b2e"),
    },
    {
        "key": bytes.fromhex("00000000000000000000000000000000"),
        "plaintext": bytes.fromhex("f34481ec3cc627bacd5dc3fb08f273e6"),
        "ciphertext": bytes.fromhex("0336763e966d92595a567cc9ce537f5e"),
    },
    {
        "key": bytes.fromhex("ffffffffffffffffffffffffffffffff"),
        "plaintext": bytes.fromhex("ffffffffffffffffffffffffffffffff"),
        "ciphertext": bytes.fromhex("bcbf217cb280cf30b2517052193ab979"),
    },
]

# FIPS-197 Appendix A key expansion checkpoints: word index -> word
KEY_EXPANSION_VECTORS = [
    # A.1 - AES-128
    {
        "key": bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c"),
        "words": {
            4: bytes.fromhex("a0fafe17"),
            43: bytes.fromhex("b6630ca6"),
        },
        "total_words": 44,
    },
    # A.2 - AES-192
    {
        "key": bytes.fromhex("8e73b0f7da0e6452c810f32b809079e562f8ead2522c6b7b"),
        "words": {
            6: bytes.fromhex("fe0c91f7"),
            51: bytes.fromhex("01002202"),
        },
        "total_words": 52,
    },
    # A.3 - AES-256 (word 12 exercises the extra SubWord step)
    {
        "key": bytes.fromhex(
            "603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4"
        ),
        "words": {
            8: bytes.fromhex("9ba35411"),
            12: bytes.fromhex("a8b09c1a"),
            59: bytes.fromhex("706c631e"),
        },
        "total_words": 60,
    },
]

_SP800_38A_PLAINTEXT = bytes.fromhex(
    "6bc1bee22e409f96e93d7e117393172a"
    "ae2d8a571e03ac9c9eb76fac45af8e51"
    "30c81c46a35ce411e5fbc1191a0a52ef"
    "f69f2445df4f9b17ad2b417be66c3710"
)

# NIST SP 800-38A Appendix F.2 (unpadded, 4 blocks)
CBC_TEST_VECTORS = [
    # F.2.1 CBC-AES128
    {
        "key": bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c"),
        "iv": bytes.fromhex("000102030405060708090a0b0c0d0e0f"),
        "plaintext": _SP800_38A_PLAINTEXT,
        "ciphertext": bytes.fromhex(
            "7649abac8119b246cee98e9b12e9197d"
            "5086cb9b507219ee95db113a917678b2"
            "73bed6b8e3c1743b7116e69e22229516"
            "3ff1caa1681fac09120eca307586e1a7"
        ),
    },
    # F.2.3 CBC-AES192
    {
        "key": bytes.fromhex("8e73b0f7da0e6452c810f32b809079e562f8ead2522c6b7b"),
        "iv": bytes.fromhex("000102030405060708090a0b0c0d0e0f"),
        "plaintext": _SP800_38A_PLAINTEXT,
        "ciphertext": bytes.fromhex(
            "4f021db243bc633d7178183a9fa071e8"
            "b4d9ada9ad7dedf4e5e738763f69145a"
            "571b242012fb7ae07fa9baac3df102e0"
            "08b0e27988598881d920a9e64f5615cd"
        ),
    },
    # F.2.5 CBC-AES256
    {
        "key": bytes.fromhex(
            "603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4"
        ),
        "iv": bytes.fromhex("000102030405060708090a0b0c0d0e0f"),
        "plaintext": _SP800_38A_PLAINTEXT,
        "ciphertext": bytes.fromhex(
            "f58c4c04d6e5f1ba779eabfb5f7bfbd6"
            "9cfc4e967edb808d679f777bc6702c7d"
            "39f23369a9d9bacfa530e26304231461"
            "b2eb05e2c39be9fcda6c19078c6a9d1b"
        ),
    },
]
