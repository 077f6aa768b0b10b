"""
Template Store - field-keyed candidate argument points.

Each field carries a core question and, per section (序論/本論/結論), a list of
candidate points weighted on two axes:
  - weight_theory: affinity with a theory-oriented instructor
  - weight_practical: affinity with a practice-oriented instructor

Field design philosophy:
  文学:   design the validity of an interpretation
  法学:   design the process of applying norms
  哲学:   design concept manipulation and the handling of objections
  社会学: design an explanatory model
  歴史学: design a frame for interpreting sources

The table is load-time constant data; lookups never raise.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class Field(str, Enum):
    """Academic field of the report."""
    LITERATURE = "literature"
    LAW = "law"
    PHILOSOPHY = "philosophy"
    SOCIOLOGY = "sociology"
    HISTORY = "history"


class SectionKey(str, Enum):
    """Internal section keys."""
    INTRO = "intro"
    BODY = "body"
    CONCLUSION = "conclusion"


@dataclass(frozen=True)
class TemplateItem:
    """A candidate argument point with its two affinity weights."""
    text: str
    weight_theory: int
    weight_practical: int


@dataclass(frozen=True)
class FieldTemplate:
    """All template data for one field."""
    core_question: str
    sections: Dict[SectionKey, List[TemplateItem]]


SECTION_TITLES: Dict[str, SectionKey] = {
    "序論": SectionKey.INTRO,
    "本論": SectionKey.BODY,
    "結論": SectionKey.CONCLUSION,
}

# Display order of the outline
SECTION_ORDER: List[str] = ["序論", "本論", "結論"]

FIELD_DISPLAY_NAMES: Dict[Field, str] = {
    Field.LITERATURE: "文学",
    Field.LAW: "法学",
    Field.PHILOSOPHY: "哲学",
    Field.SOCIOLOGY: "社会学",
    Field.HISTORY: "歴史学",
}

SECTION_ROLES: Dict[str, str] = {
    "序論": "研究の背景、問題設定、目的を提示する導入部分",
    "本論": "主要な論点を展開し、分析や検討を行う中心部分",
    "結論": "議論を総括し、成果や今後の展望を示す締めくくり部分",
}


def _items(*rows: tuple) -> List[TemplateItem]:
    return [TemplateItem(text, theory, practical) for text, theory, practical in rows]


TEMPLATES: Dict[Field, FieldTemplate] = {
    Field.LITERATURE: FieldTemplate(
        core_question="この作品の解釈はどのような根拠によって妥当といえるのか？",
        sections={
            SectionKey.INTRO: _items(
                ("作品の成立背景と同時代の文学的状況を確認する", 3, 2),
                ("先行研究における解釈の対立点を整理する", 5, 2),
                ("本稿が採用する批評理論の枠組みを提示する", 5, 1),
                ("分析対象とする場面と本文の範囲を限定する", 2, 4),
            ),
            SectionKey.BODY: _items(
                ("語りの構造と視点人物の機能を分析する", 4, 3),
                ("修辞技法の分析と意味生成への影響を検討する", 4, 3),
                ("同時代作品との比較による解釈の妥当性を検証する", 3, 4),
                ("作者の伝記的事実と作品解釈の関係を批判的に検討する", 3, 2),
                ("読者受容の歴史的変遷を具体的事例から考察する", 2, 5),
            ),
            SectionKey.CONCLUSION: _items(
                ("本稿の解釈が先行研究に付け加えた点を総括する", 4, 3),
                ("解釈の限界と残された課題を示す", 3, 3),
                ("現代の読者にとっての作品の意義を展望する", 2, 4),
            ),
        },
    ),
    Field.LAW: FieldTemplate(
        core_question="この規範は具体的事案にどのように適用されるべきか？",
        sections={
            SectionKey.INTRO: _items(
                ("問題となる法的争点と社会的背景を提示する", 3, 4),
                ("関連する条文と立法趣旨を確認する", 4, 3),
                ("検討の範囲と本稿の構成を示す", 2, 3),
            ),
            SectionKey.BODY: _items(
                ("条文の文理解釈と体系的解釈を対比する", 5, 2),
                ("主要判例の整理と判断枠組みの分析を行う", 3, 5),
                ("学説の対立点と各説の論拠を検討する", 5, 1),
                ("実務における運用状況と具体的事例を検証する", 1, 5),
                ("比較法的観点から外国法の規律と対比する", 4, 2),
            ),
            SectionKey.CONCLUSION: _items(
                ("本稿の立場と規範適用の結論を示す", 3, 4),
                ("立法論的課題と解釈論の限界を指摘する", 4, 2),
                ("今後の実務への示唆を述べる", 1, 5),
            ),
        },
    ),
    Field.PHILOSOPHY: FieldTemplate(
        core_question="この概念は反論に耐えうる形で定式化できるのか？",
        sections={
            SectionKey.INTRO: _items(
                ("問いの所在と哲学史上の位置づけを示す", 4, 1),
                ("中心概念の定義と用語法を確認する", 5, 2),
                ("本稿の論証戦略を予告する", 3, 2),
            ),
            SectionKey.BODY: _items(
                ("中心概念の分析と論証の再構成を行う", 5, 2),
                ("想定される反論とその批判的検討を行う", 5, 2),
                ("思考実験を用いて概念の適用範囲を検証する", 3, 3),
                ("具体的事例に即して理論の含意を考察する", 2, 4),
                ("対立する学説との比較による立場の明確化", 4, 2),
            ),
            SectionKey.CONCLUSION: _items(
                ("論証の成果と概念の修正点を総括する", 4, 2),
                ("残された異論と今後の課題を示す", 4, 2),
                ("現代的問題への応用可能性を展望する", 2, 4),
            ),
        },
    ),
    Field.SOCIOLOGY: FieldTemplate(
        core_question="この社会現象はどのような説明モデルで理解できるのか？",
        sections={
            SectionKey.INTRO: _items(
                ("社会現象の現状と問題意識を提示する", 2, 4),
                ("先行研究の到達点と限界を整理する", 4, 2),
                ("分析の理論的枠組みと仮説を示す", 5, 1),
            ),
            SectionKey.BODY: _items(
                ("説明モデルの構成要素と因果関係を定義する", 5, 2),
                ("調査方法とデータの特性を説明する", 3, 4),
                ("統計データに基づく実証的な検証を行う", 3, 4),
                ("具体的事例の分析による説明モデルの適用", 2, 5),
                ("代替的説明との比較と反論の検討", 4, 2),
            ),
            SectionKey.CONCLUSION: _items(
                ("分析結果の要約と仮説の検証結果を示す", 4, 3),
                ("政策的含意と実践への示唆を述べる", 1, 5),
                ("研究の限界と今後の研究課題を示す", 3, 3),
            ),
        },
    ),
    Field.HISTORY: FieldTemplate(
        core_question="この史料はどのような枠組みで解釈すべきか？",
        sections={
            SectionKey.INTRO: _items(
                ("対象とする時代の歴史的背景を概観する", 3, 3),
                ("史学史における論争の整理を行う", 5, 1),
                ("使用する史料の性格と限界を示す", 3, 4),
            ),
            SectionKey.BODY: _items(
                ("一次史料の記述内容と成立事情を分析する", 3, 4),
                ("史料批判による記述の信頼性の検証", 4, 3),
                ("同時代の他地域との比較による位置づけ", 4, 2),
                ("社会経済的構造との関係を理論的に考察する", 5, 1),
                ("具体的な人物や出来事の事例から検討する", 1, 5),
            ),
            SectionKey.CONCLUSION: _items(
                ("史料解釈の枠組みとその成果を総括する", 4, 3),
                ("従来の歴史像に対する修正点を示す", 4, 2),
                ("現代社会にとっての歴史的意義を展望する", 2, 4),
            ),
        },
    ),
}


def get_field_template(field: str) -> Optional[FieldTemplate]:
    """Look up the template of a field; None for unknown fields."""
    try:
        return TEMPLATES.get(Field(field))
    except ValueError:
        return None


def get_template_items(field: str, section_title: str) -> List[TemplateItem]:
    """
    Candidate items for a (field, section title) pair.

    Unknown field or section title yields an empty list.
    """
    template = get_field_template(field)
    section_key = SECTION_TITLES.get(section_title)
    if template is None or section_key is None:
        return []
    return list(template.sections.get(section_key, []))


def get_core_question(field: str) -> Optional[str]:
    """Core question of a field, if the field is known."""
    template = get_field_template(field)
    return template.core_question if template else None


def field_display_name(field: str) -> str:
    """Japanese display name of a field (the raw value when unknown)."""
    try:
        return FIELD_DISPLAY_NAMES[Field(field)]
    except ValueError:
        return field
