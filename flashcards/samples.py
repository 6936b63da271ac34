"""Admin-authored starter deck, seeded into empty collections."""

from typing import Dict, List, Optional

from flashcards.card_types import FlashcardType
from flashcards.clock import now_ms
from flashcards.scheduler import create_card
from flashcards.storage import CardRepository

SAMPLE_CARDS: List[Dict] = [
    {
        'card_id': 'admin-1',
        'law_id': 11,
        'article_id': '11.1',
        'front': 'متى يكون اللاعب في وضع تسلل؟',
        'back': 'يكون اللاعب في وضع تسلل إذا كان أي جزء من رأسه أو جسمه أو قدميه '
                'أقرب إلى خط مرمى الخصم من الكرة وثاني آخر خصم.',
    },
    {
        'card_id': 'admin-2',
        'law_id': 12,
        'article_id': '12.1',
        'front': 'متى تُحتسب لمسة اليد مخالفة؟',
        'back': 'تُمنح ركلة حرة مباشرة إذا لمس اللاعب الكرة بيده/ذراعه عمداً، '
                'بما في ذلك تحريك اليد/الذراع نحو الكرة، أو بعد جعل جسمه أكبر '
                'بشكل غير طبيعي.',
    },
    {
        'card_id': 'admin-3',
        'law_id': 14,
        'article_id': '14.2',
        'front': 'ما هو وضع حارس المرمى عند تنفيذ ركلة الجزاء؟',
        'back': 'يجب أن يكون حارس مرمى الفريق المدافع على خط مرماه، مواجهاً '
                'للمنفذ، بين القائمين، دون لمس قائمَي المرمى أو العارضة أو '
                'الشبكة. يجب أن يبقى بقدم واحدة على الأقل على خط المرمى أو '
                'فوقه حتى تُركل الكرة.',
    },
    {
        'card_id': 'admin-4',
        'law_id': 12,
        'article_id': '12.4',
        'front': 'ما هي معايير تحديد حرمان من فرصة واضحة لتسجيل هدف (DOGSO)؟',
        'back': 'يُراعى: المسافة بين مكان المخالفة والمرمى، الاتجاه العام للعب، '
                'احتمالية الاحتفاظ بالكرة أو السيطرة عليها، موقع المدافعين '
                'وحركتهم.',
    },
    {
        'card_id': 'admin-5',
        'law_id': 11,
        'article_id': '11.3',
        'front': 'متى لا توجد مخالفة تسلل؟',
        'back': 'لا توجد مخالفة تسلل إذا استلم اللاعب الكرة مباشرة من: ركلة '
                'مرمى، رمية تماس، ركلة ركنية.',
    },
]


def seed_sample_cards(repository: CardRepository, now: Optional[int] = None) -> int:
    """Add any starter cards the repository doesn't have. Returns count added."""
    if now is None:
        now = now_ms()
    new_cards = [
        create_card(card_type=FlashcardType.ADMIN.value, now=now, **sample)
        for sample in SAMPLE_CARDS
        if repository.get_card(sample['card_id']) is None
    ]
    if new_cards:
        repository.upsert_cards(new_cards)
    return len(new_cards)
