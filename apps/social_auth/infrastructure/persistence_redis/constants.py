"""Redis key constants."""

KEY_PREFIX = "social_auth:"
DOCUMENT_KEY_PREFIX = f"{KEY_PREFIX}doc:"
DOCUMENT_IDS_KEY_PREFIX = f"{KEY_PREFIX}ids:"
DOCUMENT_INDEX_KEY_PREFIX = f"{KEY_PREFIX}idx:"

# query_by_field(s) 에서 인덱스를 사용하는 필드
DEFAULT_INDEXED_FIELDS = ("user_id", "provider", "email", "kakao_id", "naver_id")
