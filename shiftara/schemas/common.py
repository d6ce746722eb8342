"""공통 Pydantic 요청/응답 스키마 정의.

Common Pydantic request/response schema definitions shared by several
API domains (time-of-day strings, PIN strings).
"""

from typing import Annotated

from pydantic import Field

# "HH:MM" 24시간 형식 — 24-hour time-of-day string
TimeOfDay = Annotated[str, Field(pattern=r"^([01]\d|2[0-3]):[0-5]\d$", examples=["08:00"])]

# 4~6자리 숫자 PIN — 4 to 6 digit self-service PIN
Pin = Annotated[str, Field(pattern=r"^\d{4,6}$", examples=["123456"])]

