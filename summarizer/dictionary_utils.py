"""
Dictionary-based English to Urdu translation.

Last-resort fallback when Gemini is unavailable or returns a translation
without any Urdu script. Word-for-word lookup only: no grammar, no word
reordering, no multi-word phrases. Unknown words pass through unchanged.
"""

from typing import Dict

# Common English words and their Urdu equivalents
ENGLISH_TO_URDU: Dict[str, str] = {
    'the': 'یہ',
    'and': 'اور',
    'is': 'ہے',
    'in': 'میں',
    'to': 'کو',
    'of': 'کا',
    'a': 'ایک',
    'that': 'یہ',
    'it': 'یہ',
    'with': 'کے ساتھ',
    'for': 'کے لیے',
    'as': 'جیسے',
    'was': 'تھا',
    'on': 'پر',
    'are': 'ہیں',
    'you': 'آپ',
    'this': 'یہ',
    'be': 'ہونا',
    'at': 'پر',
    'by': 'کے ذریعے',
    'not': 'نہیں',
    'or': 'یا',
    'have': 'ہے',
    'from': 'سے',
    'they': 'وہ',
    'we': 'ہم',
    'but': 'لیکن',
    'can': 'کر سکتے ہیں',
    'out': 'باہر',
    'other': 'دوسرے',
    'were': 'تھے',
    'all': 'تمام',
    'there': 'وہاں',
    'when': 'جب',
    'up': 'اوپر',
    'use': 'استعمال',
    'your': 'آپ کا',
    'how': 'کیسے',
    'our': 'ہمارا',
    'if': 'اگر',
    'no': 'نہیں',
    'had': 'تھا',
    'what': 'کیا',
    'so': 'تو',
    'about': 'کے بارے میں',
    'time': 'وقت',
    'very': 'بہت',
    'would': 'گا',
    'has': 'ہے',
    'more': 'زیادہ',
    'go': 'جانا',
    'see': 'دیکھنا',
    'make': 'بنانا',
    'get': 'لینا',
    'come': 'آنا',
    'know': 'جاننا',
    'work': 'کام',
    'people': 'لوگ',
    'day': 'دن',
    'way': 'طریقہ',
    'good': 'اچھا',
    'new': 'نیا',
    'first': 'پہلا',
    'great': 'عظیم',
    'technology': 'ٹیکنالوجی',
    'business': 'کاروبار',
    'company': 'کمپنی',
    'world': 'دنیا',
    'life': 'زندگی',
    'system': 'نظام',
    'development': 'ترقی',
    'software': 'سافٹ ویئر',
    'data': 'ڈیٹا',
    'information': 'معلومات',
    'service': 'خدمت',
    'management': 'انتظام',
    'market': 'بازار',
    'user': 'صارف',
    'solution': 'حل',
    'process': 'عمل',
    'project': 'منصوبہ',
    'application': 'اپلیکیشن',
    'digital': 'ڈیجیٹل',
    'online': 'آن لائن',
    'internet': 'انٹرنیٹ',
    'website': 'ویب سائٹ',
    'computer': 'کمپیوٹر',
    'mobile': 'موبائل',
    'platform': 'پلیٹ فارم',
    'network': 'نیٹ ورک',
    'security': 'سیکیورٹی',
    'future': 'مستقبل',
    'innovation': 'جدت',
    'artificial': 'مصنوعی',
    'intelligence': 'ذہانت',
    'machine': 'مشین',
    'learning': 'سیکھنا',
    'algorithm': 'الگورتھم',
    'programming': 'پروگرامنگ',
    'code': 'کوڈ',
    'database': 'ڈیٹابیس',
    'analysis': 'تجزیہ',
    'design': 'ڈیزائن',
    'content': 'مواد',
    'media': 'میڈیا',
    'communication': 'رابطہ',
    'experience': 'تجربہ',
    'performance': 'کارکردگی',
    'quality': 'معیار',
    'support': 'سپورٹ',
    'product': 'پروڈکٹ',
    'customer': 'کسٹمر',
    'education': 'تعلیم',
    'research': 'تحقیق',
    'science': 'سائنس',
    'health': 'صحت',
    'medical': 'طبی',
    'economic': 'اقتصادی',
    'financial': 'مالی',
    'political': 'سیاسی',
    'social': 'سماجی',
    'environmental': 'ماحولیاتی',
    'global': 'عالمی',
    'international': 'بین الاقوامی',
    'national': 'قومی',
    'local': 'مقامی',
    'community': 'کمیونٹی',
    'organization': 'تنظیم',
    'government': 'حکومت',
    'public': 'عوامی',
    'private': 'نجی',
    'personal': 'ذاتی',
    'professional': 'پیشہ ورانہ',
    'industry': 'صنعت',
    'energy': 'توانائی',
    'environment': 'ماحول',
    'climate': 'آب و ہوا',
    'change': 'تبدیلی',
    'growth': 'ترقی',
    'impact': 'اثر',
    'challenge': 'چیلنج',
    'opportunity': 'موقع',
    'strategy': 'حکمت عملی',
    'planning': 'منصوبہ بندی',
    'implementation': 'نافذ کرنا',
}

# Removed from each token before lookup
LOOKUP_PUNCTUATION = '.,!?;:()[]{}\'"'
_PUNCTUATION_TABLE = str.maketrans('', '', LOOKUP_PUNCTUATION)


def translate_word(word: str) -> str:
    """Translate a single token, or return it unchanged if it is not in the table."""
    key = word.lower().translate(_PUNCTUATION_TABLE)
    return ENGLISH_TO_URDU.get(key, word)


def translate_to_urdu_static(text: str) -> str:
    """
    Translate text word by word using ENGLISH_TO_URDU.

    Examples:
        >>> translate_to_urdu_static("the data is important")
        'یہ ڈیٹا ہے important'

        >>> translate_to_urdu_static("")
        ''
    """
    if not text:
        return ''

    return ' '.join(translate_word(word) for word in text.split())
