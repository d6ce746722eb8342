"""PIN 해싱 및 검증 유틸리티 모듈.

PIN hashing and verification utility module.
Employee self-service PINs are credentials: they are hashed with bcrypt
and never stored or compared in plain text.
"""

import bcrypt

# 존재하지 않는 직원에 대해서도 동일한 비용의 비교를 수행하기 위한 더미 해시
# Dummy hash so unknown employees still cost one bcrypt comparison
_DUMMY_HASH: str = bcrypt.hashpw(b"000000", bcrypt.gensalt()).decode("utf-8")


def hash_pin(pin: str) -> str:
    """평문 PIN을 bcrypt 해시로 변환합니다.

    Hash a plain text PIN using bcrypt. The hash includes a random salt.

    Args:
        pin: 평문 PIN, 4~6자리 숫자 (Plain text 4-6 digit PIN)

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string)
    """
    return bcrypt.hashpw(pin.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_pin(plain_pin: str, pin_hash: str | None) -> bool:
    """평문 PIN과 저장된 해시를 비교 검증합니다.

    Verify a plain PIN against a stored bcrypt hash. When no hash is stored
    a comparison against a dummy hash is still performed and False returned.

    Args:
        plain_pin: 입력된 PIN (Submitted PIN)
        pin_hash: 저장된 bcrypt 해시 또는 None (Stored hash or None)

    Returns:
        bool: 일치하면 True (True if the PIN matches)
    """
    if pin_hash is None:
        bcrypt.checkpw(plain_pin.encode("utf-8"), _DUMMY_HASH.encode("utf-8"))
        return False
    return bcrypt.checkpw(plain_pin.encode("utf-8"), pin_hash.encode("utf-8"))
