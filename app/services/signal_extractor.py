"""Keyword classification of review text into ambience tags and smoking policy."""
import re
from typing import Optional, Sequence

from app.models.venue_review import SmokingPolicy

MAX_AMBIENCE_TAGS = 4

# Evaluated in order; insertion order of tags follows this list
AMBIENCE_RULES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"高層|眺め|景色|ビュー|夜景|view", re.IGNORECASE), "🏙️ 眺望が良い"),
    (re.compile(r"一軒家|隠れ家|古民家", re.IGNORECASE), "🏠 一軒家・隠れ家"),
    (re.compile(r"個室|プライベート|半個室", re.IGNORECASE), "🚪 個室あり"),
    (re.compile(r"テラス|屋上|オープン", re.IGNORECASE), "🌿 テラス席"),
    (re.compile(r"デート|記念日|誕生日|ロマンチック", re.IGNORECASE), "💑 デート向き"),
    (re.compile(r"おしゃれ|スタイリッシュ|モダン", re.IGNORECASE), "✨ おしゃれ"),
    (re.compile(r"落ち着|静か|大人|上品", re.IGNORECASE), "🕯️ 落ち着いた雰囲気"),
    (re.compile(r"広い|開放|ゆったり", re.IGNORECASE), "🏛️ 開放的"),
    (re.compile(r"カウンター|一人|ソロ", re.IGNORECASE), "🍸 カウンター席"),
    (re.compile(r"接客|サービス|ホスピタリティ", re.IGNORECASE), "👤 サービス◎"),
    (re.compile(r"コスパ|リーズナブル|お得", re.IGNORECASE), "💰 コスパ良好"),
]

# Priority order matters: "喫煙室" must win over the bare "禁煙" rule
SMOKING_RULES: list[tuple[re.Pattern, SmokingPolicy]] = [
    (re.compile(r"喫煙可|喫煙室|喫煙席", re.IGNORECASE), SmokingPolicy.ALLOWED),
    (re.compile(r"分煙", re.IGNORECASE), SmokingPolicy.SEPARATED),
    (re.compile(r"完全禁煙|禁煙席|禁煙", re.IGNORECASE), SmokingPolicy.PROHIBITED),
]

# Google place type -> ambience label
ATMOSPHERE_TAGS: dict[str, str] = {
    "fine_dining_restaurant": "🌟 高級ダイニング",
    "japanese_restaurant": "🏯 和の雰囲気",
    "french_restaurant": "🇫🇷 フレンチ",
    "italian_restaurant": "🇮🇹 イタリアン",
    "steak_house": "🥩 ステーキハウス",
    "sushi_restaurant": "🍣 寿司",
    "seafood_restaurant": "🦞 シーフード",
    "brunch_restaurant": "🥞 ブランチ",
    "ramen_restaurant": "🍜 ラーメン",
    "barbecue_restaurant": "🔥 焼肉・BBQ",
    "bar": "🥂 バー",
    "wine_bar": "🍷 ワインバー",
    "cocktail_bar": "🍸 カクテルバー",
    "cafe": "☕ カフェ",
    "coffee_shop": "☕ コーヒーショップ",
}


def extract_ambience_tags(review_texts: Optional[Sequence[str]]) -> list[str]:
    """Collect up to four ambience tags from reviews.

    A tag is added the first time its pattern matches any review. Once four
    distinct tags are collected further matches are ignored.
    """
    found: list[str] = []
    for text in review_texts or []:
        text = text or ""
        for pattern, tag in AMBIENCE_RULES:
            if len(found) >= MAX_AMBIENCE_TAGS:
                return found
            if tag not in found and pattern.search(text):
                found.append(tag)
    return found


def extract_smoking_policy(
    review_texts: Optional[Sequence[str]],
) -> Optional[SmokingPolicy]:
    """Return the smoking label of the first matching rule, review by review.

    None means no review mentions smoking; it is not a claim either way.
    """
    for text in review_texts or []:
        text = text or ""
        for pattern, policy in SMOKING_RULES:
            if pattern.search(text):
                return policy
    return None


def type_tags(types: Optional[Sequence[str]]) -> list[str]:
    """Map Google place types to ambience labels, keeping type order."""
    return [ATMOSPHERE_TAGS[t] for t in types or [] if t in ATMOSPHERE_TAGS]


def build_appeal_tags(
    summary: Optional[str],
    types: Optional[Sequence[str]],
    review_texts: Optional[Sequence[str]],
) -> list[str]:
    """Compose the detail view tag list.

    Editorial summary first, then type tags, then review tags not already present.
    """
    tags = type_tags(types)
    for tag in extract_ambience_tags(review_texts):
        if tag not in tags:
            tags.append(tag)
    if summary:
        tags.insert(0, f"📝 {summary}")
    return tags
