"""Built-in reciter catalogue used when no timing files are available."""

from typing import List, Optional

from mushaf_library.core import ReciterInfo

_HAFS = "حفص عن عاصم"

BUILTIN_RECITERS: List[ReciterInfo] = [
    ReciterInfo(1, "عبد الباسط عبد الصمد", "Abdul Basit Abdul Samad", _HAFS,
                "https://server6.mp3quran.net/abas_64/"),
    ReciterInfo(5, "محمد صديق المنشاوي", "Mohamed Siddiq Al-Minshawi", _HAFS,
                "https://server10.mp3quran.net/minsh/Rewayat-Hafs-A-n-Assem/"),
    ReciterInfo(9, "محمود خليل الحصري", "Mahmoud Khalil Al-Hussary", _HAFS,
                "https://server13.mp3quran.net/husr/"),
    ReciterInfo(10, "محمود خليل الحصري (مجود)", "Mahmoud Khalil Al-Hussary (Mujawwad)", _HAFS,
                "https://server13.mp3quran.net/husr/Mujawwad/"),
    ReciterInfo(31, "مشاري راشد العفاسي", "Mishari Rashid Al-Afasy", _HAFS,
                "https://server8.mp3quran.net/afs/"),
    ReciterInfo(32, "سعد الغامدي", "Saad Al-Ghamdi", _HAFS,
                "https://server7.mp3quran.net/s_gmd/"),
    ReciterInfo(51, "ماهر المعيقلي", "Maher Al-Muaiqly", _HAFS,
                "https://server12.mp3quran.net/maher/"),
    ReciterInfo(53, "عبد الرحمن السديس", "Abdul Rahman Al-Sudais", _HAFS,
                "https://server11.mp3quran.net/sds/"),
    ReciterInfo(60, "سعود الشريم", "Saud Al-Shuraim", _HAFS,
                "https://server7.mp3quran.net/shur/"),
    ReciterInfo(62, "أحمد بن علي العجمي", "Ahmed ibn Ali Al-Ajmi", _HAFS,
                "https://server10.mp3quran.net/ajm/"),
    ReciterInfo(67, "ياسر الدوسري", "Yasser Al-Dosari", _HAFS,
                "https://server11.mp3quran.net/yasser/"),
    ReciterInfo(74, "عبد الله بصفر", "Abdullah Basfar", _HAFS,
                "https://server11.mp3quran.net/bsfr/"),
    ReciterInfo(78, "خليفة الطنيجي", "Khalifa Al-Tunaiji", _HAFS,
                "https://server11.mp3quran.net/taniji/"),
    ReciterInfo(106, "ناصر القطامي", "Nasser Al-Qatami", _HAFS,
                "https://server6.mp3quran.net/qtm/"),
    ReciterInfo(112, "عبد الله الجهني", "Abdullah Al-Juhani", _HAFS,
                "https://server11.mp3quran.net/jhn/"),
    ReciterInfo(118, "بندر بليلة", "Bandar Baleela", _HAFS,
                "https://server10.mp3quran.net/bnd/"),
    ReciterInfo(159, "محمد أيوب", "Muhammad Ayyub", _HAFS,
                "https://server8.mp3quran.net/ayyub/"),
    ReciterInfo(256, "عبد الله المطرود", "Abdullah Al-Matroud", _HAFS,
                "https://server10.mp3quran.net/mat/"),
]


def get_builtin_reciter(reciter_id: int) -> Optional[ReciterInfo]:
    return next((r for r in BUILTIN_RECITERS if r.id == reciter_id), None)
