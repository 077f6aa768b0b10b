"""
Reference suggestions - recommends readings per field by matching keywords
extracted from the outline points against reference titles.
"""

import re
from typing import Dict, List, Sequence

from reportcraft.engines.outline.templates import Field

THEORETICAL = "理論的基盤"
METHODOLOGICAL = "方法論・アプローチ"
CONCRETE = "具体的検討"

MAX_PER_CATEGORY = 3
DEFAULT_PER_CATEGORY = 2

POINT_KEYWORD_PATTERNS: List[re.Pattern] = [
    re.compile(r"理論|概念|フレームワーク|モデル"),
    re.compile(r"分析|検討|考察|解釈"),
    re.compile(r"方法|手法|アプローチ|技法"),
    re.compile(r"事例|具体|例|ケース"),
    re.compile(r"比較|対比|相違|類似"),
    re.compile(r"歴史|史料|時代|背景"),
    re.compile(r"実務|実践|適用|運用"),
]

REFERENCES: Dict[Field, Dict[str, List[str]]] = {
    Field.LITERATURE: {
        THEORETICAL: [
            "テリー・イーグルトン『文学とは何か』（岩波書店）",
            "ロラン・バルト『物語の構造分析』（みすず書房）",
            "前田愛『文学テクスト入門』（筑摩書房）",
        ],
        METHODOLOGICAL: [
            "廣野由美子『批評理論入門』（中央公論新社）",
            "ジェラール・ジュネット『物語のディスクール』（水声社）",
            "石原千秋ほか『読むための理論』（世織書房）",
        ],
        CONCRETE: [
            "小森陽一『構造としての語り』（新曜社）",
            "柄谷行人『日本近代文学の起源』（講談社）",
            "前田愛『近代読者の成立』（岩波書店）",
        ],
    },
    Field.LAW: {
        THEORETICAL: [
            "H.L.A.ハート『法の概念』（筑摩書房）",
            "長谷部恭男『法とは何か』（河出書房新社）",
            "団藤重光『法学の基礎』（有斐閣）",
        ],
        METHODOLOGICAL: [
            "笹倉秀夫『法解釈講義』（東京大学出版会）",
            "田中成明『法的思考とはどのようなものか』（有斐閣）",
            "大村敦志ほか『民法研究ハンドブック』（有斐閣）",
        ],
        CONCRETE: [
            "『判例百選』シリーズ（有斐閣）",
            "中野次雄編『判例とその読み方』（有斐閣）",
            "滝沢正『比較法』（三省堂）",
        ],
    },
    Field.PHILOSOPHY: {
        THEORETICAL: [
            "野矢茂樹『哲学・航海日誌』（中央公論新社）",
            "トマス・ネーゲル『哲学ってどんなこと？』（昭和堂）",
            "戸田山和久『哲学入門』（筑摩書房）",
        ],
        METHODOLOGICAL: [
            "戸田山和久『論文の教室』（NHK出版）",
            "野矢茂樹『論理トレーニング』（産業図書）",
            "ジュリアン・バジーニ『100の思考実験』（紀伊國屋書店）",
        ],
        CONCRETE: [
            "マイケル・サンデル『これからの「正義」の話をしよう』（早川書房）",
            "永井均『子どものための哲学対話』（講談社）",
            "伊勢田哲治『哲学思考トレーニング』（筑摩書房）",
        ],
    },
    Field.SOCIOLOGY: {
        THEORETICAL: [
            "マックス・ヴェーバー『社会学の根本概念』（岩波書店）",
            "アンソニー・ギデンズ『社会学』（而立書房）",
            "富永健一『社会学原理』（岩波書店）",
        ],
        METHODOLOGICAL: [
            "盛山和夫『社会調査法入門』（有斐閣）",
            "佐藤郁哉『フィールドワーク』（新曜社）",
            "キング・コヘイン・ヴァーバ『社会科学のリサーチ・デザイン』（勁草書房）",
        ],
        CONCRETE: [
            "山田昌弘『希望格差社会』（筑摩書房）",
            "上野千鶴子『家父長制と資本制』（岩波書店）",
            "小熊英二『日本社会のしくみ』（講談社）",
        ],
    },
    Field.HISTORY: {
        THEORETICAL: [
            "E.H.カー『歴史とは何か』（岩波書店）",
            "遅塚忠躬『史学概論』（東京大学出版会）",
            "マルク・ブロック『歴史のための弁明』（岩波書店）",
        ],
        METHODOLOGICAL: [
            "今井登志喜『歴史学研究法』（東京大学出版会）",
            "佐藤進一『古文書学入門』（法政大学出版局）",
            "成田龍一『歴史学のスタイル』（校倉書房）",
        ],
        CONCRETE: [
            "網野善彦『日本の歴史をよみなおす』（筑摩書房）",
            "フェルナン・ブローデル『地中海』（藤原書店）",
            "阿部謹也『ハーメルンの笛吹き男』（筑摩書房）",
        ],
    },
}


def extract_point_keywords(points: Sequence[str]) -> List[str]:
    """Unique academic keywords appearing in the points."""
    keywords: List[str] = []
    for point in points:
        for pattern in POINT_KEYWORD_PATTERNS:
            for match in pattern.findall(point):
                if match not in keywords:
                    keywords.append(match)
    return keywords


def suggest_references(field: str, points: Sequence[str]) -> List[dict]:
    """
    Suggest references for an outline.

    Returns:
        List of {"category": str, "references": [str]}; empty for unknown fields
    """
    try:
        field_refs = REFERENCES.get(Field(field))
    except ValueError:
        field_refs = None
    if not field_refs:
        return []

    keywords = extract_point_keywords(points)
    suggestions = []
    for category, refs in field_refs.items():
        matched = [ref for ref in refs if any(k in ref for k in keywords)]
        if matched:
            suggestions.append({"category": category, "references": matched[:MAX_PER_CATEGORY]})

    if not suggestions:
        suggestions = [
            {"category": THEORETICAL, "references": field_refs[THEORETICAL][:DEFAULT_PER_CATEGORY]},
            {"category": METHODOLOGICAL, "references": field_refs[METHODOLOGICAL][:DEFAULT_PER_CATEGORY]},
        ]
    return suggestions
