"""Word lists for the sentence generator and the tile-ordering tagger."""

# (text, pinyin, english, tag) rows of the built-in lexical bank.
BANK_ROWS = (
    # Time
    ("今天", "jīntiān", "today", "Time"),
    ("现在", "xiànzài", "now", "Time"),
    ("明天早上", "míngtiān zǎoshang", "tomorrow morning", "Time"),
    ("周末", "zhōumò", "the weekend", "Time"),
    ("晚上", "wǎnshang", "in the evening", "Time"),
    # Subject
    ("我", "wǒ", "I", "Subject"),
    ("你", "nǐ", "you", "Subject"),
    ("他", "tā", "he", "Subject"),
    ("她", "tā", "she", "Subject"),
    ("我们", "wǒmen", "we", "Subject"),
    ("他们", "tāmen", "they", "Subject"),
    # Place
    ("在北京", "zài Běijīng", "in Beijing", "Place"),
    ("在公司", "zài gōngsī", "at the company", "Place"),
    ("在酒店", "zài jiǔdiàn", "at the hotel", "Place"),
    ("在机场", "zài jīchǎng", "at the airport", "Place"),
    ("在超市", "zài chāoshì", "at the supermarket", "Place"),
    # Verb
    ("学习", "xuéxí", "study", "Verb"),
    ("工作", "gōngzuò", "work", "Verb"),
    ("吃", "chī", "eat", "Verb"),
    ("喝", "hē", "drink", "Verb"),
    ("参观", "cānguān", "visit", "Verb"),
    ("开会", "kāihuì", "have a meeting", "Verb"),
    ("见面", "jiànmiàn", "meet", "Verb"),
    ("买", "mǎi", "buy", "Verb"),
    # Object
    ("中文", "Zhōngwén", "Chinese", "Object"),
    ("报告", "bàogào", "a report", "Object"),
    ("米饭", "mǐfàn", "rice", "Object"),
    ("咖啡", "kāfēi", "coffee", "Object"),
    ("水果", "shuǐguǒ", "fruit", "Object"),
    ("博物馆", "bówùguǎn", "the museum", "Object"),
    # Connector
    ("虽然", "suīrán", "although", "Connector"),
    ("但是", "dànshì", "but", "Connector"),
    ("如果", "rúguǒ", "if", "Connector"),
    ("那么", "nàme", "then", "Connector"),
    ("先", "xiān", "first", "Connector"),
    ("然后", "ránhòu", "then", "Connector"),
    ("还是", "háishi", "still", "Connector"),
    # Aspect
    ("正在", "zhèngzài", "be (doing)", "Aspect"),
    # Punctuation
    ("，", ",", ",", "Punctuation"),
    ("。", ".", ".", "Punctuation"),
)

COMMA = "，"
PERIOD = "。"
ASPECT_MARKER = "正在"
LOCATION_PREFIX = "在"

# Candidate spellings for each content slot, in priority order.
SLOT_CANDIDATES = {
    "Time": ("今天", "现在", "明天早上", "周末", "晚上"),
    "Subject": ("我", "你", "他", "她", "我们", "他们"),
    "Place": ("在北京", "在公司", "在酒店", "在机场", "在超市"),
    "Verb": ("学习", "工作", "吃", "喝", "参观", "开会", "见面", "买"),
    "Object": ("中文", "报告", "米饭", "咖啡", "水果", "博物馆"),
}
PLURAL_SUBJECTS = ("他们", "我们")
MEETING_VERBS = ("见面",)

# The tagger keeps its own membership, which is not the same as the bank's
# (你们, 写, 去, 超市 ... are only known here).
TAGGER_TIME_WORDS = frozenset({"今天", "现在", "明天早上", "周末", "晚上"})
TAGGER_SUBJECTS = frozenset({"我", "你", "他", "她", "我们", "你们", "他们"})
TAGGER_CONNECTORS = frozenset({"虽然", "但是", "如果", "那么", "先", "然后", "还是", COMMA})
TAGGER_ASPECTS = frozenset({ASPECT_MARKER})
TAGGER_VERBS = frozenset({"开会", "学习", "写", "吃", "喝", "去", "见面"})
TAGGER_OBJECTS = frozenset({"中文", "报告", "超市", "晚饭", "机场"})
TAGGER_PUNCTUATION = frozenset({COMMA, PERIOD})

# Two-marker frames, in the order the markers must appear.
FRAMES = {
    "concession": ("虽然", "但是"),
    "conditional": ("如果", "那么"),
    "sequence": ("先", "然后"),
}

SET_IDS = (
    "HSK1",
    "HSK2",
    "HSK3",
    "HSK4",
    "HSK5",
    "HSK6",
    "Travel & Tourism",
    "Workspace",
    "Business",
    "Academic",
    "Global",
    "Everyday Life",
    "News & Culture",
)
DEFAULT_SET_ID = "HSK1"

SET_FILES = {
    "HSK1": "HSK1.json",
    "HSK2": "HSK2.json",
    "HSK3": "HSK3.json",
    "HSK4": "HSK4.json",
    "HSK5": "HSK5.json",
    "HSK6": "HSK6.json",
    "Travel & Tourism": "travel_tourism.json",
    "Workspace": "workspace.json",
    "Business": "business.json",
    "Academic": "academic.json",
    "Global": "global.json",
    "Everyday Life": "everyday_life.json",
    "News & Culture": "news_culture.json",
}

__all__ = [
    "ASPECT_MARKER",
    "BANK_ROWS",
    "COMMA",
    "DEFAULT_SET_ID",
    "FRAMES",
    "LOCATION_PREFIX",
    "MEETING_VERBS",
    "PERIOD",
    "PLURAL_SUBJECTS",
    "SET_FILES",
    "SET_IDS",
    "SLOT_CANDIDATES",
    "TAGGER_ASPECTS",
    "TAGGER_CONNECTORS",
    "TAGGER_OBJECTS",
    "TAGGER_PUNCTUATION",
    "TAGGER_SUBJECTS",
    "TAGGER_TIME_WORDS",
    "TAGGER_VERBS",
]
