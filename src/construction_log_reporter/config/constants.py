"""Constants and configuration values."""

# Report captions (Chinese, as printed on the site log form)
REPORT_TITLE = "施工日志"
DEFAULT_FONT_NAME = "STSong-Light"

SECTION_BASIC_INFO = "基本信息"
SECTION_WEATHER = "天气信息"
SECTION_MEDIA = "现场照片"
SECTION_SIGNATURE = "签名确认"

BASIC_INFO_LABELS = ("项目名称", "施工日期", "施工部位", "负责人")
WEATHER_LABELS = ("天气状况", "温度", "风力/风向")

# (label, ReportInput field) for the single-column content blocks
CONTENT_SECTIONS = (
    ("施工内容", "main_content"),
    ("人员设备", "personnel_equipment"),
    ("质量管理", "quality_management"),
    ("安全管理", "safety_management"),
)

SIGNATURE_LABELS = ("施工员签名：", "质量员签名：", "安全员签名：")
SIGNATURE_LINE = "_________________"

NO_PHOTOS_TEXT = "暂无现场照片"
IMAGE_FAILED_TEXT = "图片加载失败"

# Date formats
LOG_DATE_FORMAT = "%Y年%m月%d日"
CAPTION_TIME_FORMAT = "%H:%M"
FILE_DATE_FORMAT = "%y%m%d"

# Output files
REPORT_FILE_LABEL = "施工日志_"
REPORT_FOLDER_NAME = "ConstructionLogs"
PDF_EXTENSION = ".pdf"

# Caiyun skycon codes -> display labels
SKYCON_LABELS = {
    "CLEAR_DAY": "晴天",
    "CLEAR_NIGHT": "晴夜",
    "PARTLY_CLOUDY_DAY": "多云",
    "PARTLY_CLOUDY_NIGHT": "多云",
    "CLOUDY": "阴天",
    "LIGHT_HAZE": "轻雾",
    "MODERATE_HAZE": "中雾",
    "HEAVY_HAZE": "重雾",
    "LIGHT_RAIN": "小雨",
    "MODERATE_RAIN": "中雨",
    "HEAVY_RAIN": "大雨",
    "STORM_RAIN": "暴雨",
    "LIGHT_SNOW": "小雪",
    "MODERATE_SNOW": "中雪",
    "HEAVY_SNOW": "大雪",
    "STORM_SNOW": "暴雪",
    "DUST": "浮尘",
    "SAND": "沙尘",
    "WIND": "大风",
}
UNKNOWN_SKYCON_LABEL = "未知"

# Eight compass points, clockwise from north
WIND_DIRECTION_LABELS = ("北风", "东北风", "东风", "东南风", "南风", "西南风", "西风", "西北风")

# HTTP statuses retried with exponential backoff
RETRYABLE_SERVER_STATUSES = frozenset({500, 502, 503, 504})
