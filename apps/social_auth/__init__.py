"""Social Auth Service.

Kakao / Naver 소셜 로그인과 Spotify 연동을 위한 OAuth state·토큰 수명주기 서비스입니다.
"""
