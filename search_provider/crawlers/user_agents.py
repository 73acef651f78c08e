"""User-Agent 문자열 모음"""

CHROME_101 = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/101.0.4951.67 Safari/537.36"
)

CHROME_43 = (
    "Mozilla/5.0 (Windows NT 6.1; WOW64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/43.0.2357.134 Safari/537.36"
)


# User-Agent에 민감하지 않은 엔진의 기본값
DEFAULT_USER_AGENT = CHROME_43

# CHROME_101과 함께 보내야 하는 클라이언트 힌트
CHROME_101_CLIENT_HINTS = {
    "sec-ch-ua": '" Not A;Brand";v="99", "Chromium";v="101", "Google Chrome";v="101"',
    "sec-ch-ua-mobile": "?0",
    "sec-ch-ua-platform": '"Windows"',
}
