# core/answer/faq.py
# -*- coding: utf-8 -*-

"""
多语言 FAQ 表：按顺序匹配，第一条命中即返回。
"""

from __future__ import annotations

import re
from typing import Dict, List, Pattern, Tuple

QA = Tuple[Tuple[Pattern[str], ...], str]


def _qa(answer: str, *patterns: str) -> QA:
    return tuple(re.compile(p, re.I) for p in patterns), answer


FRIENDLY_WELCOME: Dict[str, str] = {
    "en": (
        "Hi! I'm MinT Assistant. You can chat in English, Amharic, or Afan Oromo. "
        "Use the language selector to switch. Ask about verification, projects, funding, or events."
    ),
    "am": (
        "ሰላም! የMinT አስስታንት ነኝ። በእንግሊዝኛ፣ አማርኛ ወይም አፋን ኦሮሞ መወያየት ትችላላችሁ። "
        "ቋንቋን ለመቀየር የተጠቃሚ መምረጫውን ይጠቀሙ። ስለ ማረጋገጫ፣ ፕሮጀክቶች፣ ፋይናንስ እና ኢቫንቶች ጠይቁ።"
    ),
    "om": (
        "Akkam! Ani MinT Assistant. Afaan Ingilizii, Amaariffaa, ykn Afaan Oromoo waliin haasaʼuu dandeessu. "
        "Afaan jijjiiruuf filannoo fayyadamaa itti fayyadamaa. "
        "Mirkaneessa, projektoota, deeggarsa maallaqa fi eventoota gaafadhu."
    ),
}

_CONTACT_EN = "Contact MinT: Phone +251 11 8 132 191, Email contact@mint.gov.et, Website https://www.mint.gov.et."

FAQ: Dict[str, List[QA]] = {
    "en": [
        _qa(
            "The Ministry of Innovation and Technology (MinT) of Ethiopia leads national innovation, "
            "digital transformation, and technology development. Learn more at http://www.mint.gov.et/.",
            r"ministry\s+of\s+innovation|about\s+mint|what\s+is\s+mint",
        ),
        _qa(_CONTACT_EN, r"\b(contact|phone|email)\b"),
        _qa(
            "Working hours: Monday–Friday, 8:00–17:00 (local time).",
            r"working\s*hours|\bopen\b|\btime\b|\bhours\b",
        ),
        _qa(
            "MinT supports innovators with technology transfer, digitalization programs, expert mentorship, "
            "funding opportunities, events, and certification.",
            r"programs|services|opportunities",
        ),
        _qa(
            "To get verified on the MinT Innovation Portal:\n"
            "1. Log in to your account\n"
            "2. Go to your Dashboard\n"
            "3. Click on 'Apply for Verification'\n"
            "4. Complete the verification form\n"
            "5. Upload required documents\n"
            "6. Submit for review\n\n"
            "Verification typically takes 3-5 business days.",
            r"verify|verification|become\s+verified|apply\s*now",
        ),
        _qa(
            "To create an account:\n"
            "1. Go to /register\n"
            "2. Enter your email and create a password\n"
            "3. Verify your email address\n"
            "4. Complete your profile information\n"
            "5. Start exploring the portal!",
            r"register|sign\s*up|create\s*account",
        ),
        _qa(
            "Sign in options:\n"
            "1. Email/Password: Go to /login and enter your credentials\n"
            "2. Google: Click 'Sign in with Google'\n\n"
            "Forgot password? Use the 'Reset Password' link on the login page.",
            r"login|sign\s*in",
        ),
        _qa(
            "To edit your profile:\n"
            "1. Log in to your account\n"
            "2. Click on your profile picture/name in the top right\n"
            "3. Select 'Edit Profile'\n"
            "4. Update your information\n"
            "5. Click 'Save Changes'",
            r"edit\s+profile|update\s+profile|change\s+profile",
        ),
        _qa(
            "To change your password:\n"
            "1. Go to your Profile Settings\n"
            "2. Click on 'Change Password'\n"
            "3. Enter your current password\n"
            "4. Enter your new password\n"
            "5. Confirm the new password\n"
            "6. Click 'Update Password'\n\n"
            "For password reset, use the 'Forgot Password' link on the login page.",
            r"change\s+password|update\s+password|reset\s+password",
        ),
        _qa(
            "To delete your account:\n"
            "1. Log in to your account\n"
            "2. Go to Account Settings\n"
            "3. Scroll to 'Danger Zone'\n"
            "4. Click 'Delete My Account'\n"
            "5. Confirm by typing 'DELETE'\n\n"
            "Warning: this action cannot be undone.",
            r"delete\s+account|remove\s+account|close\s+account",
        ),
        _qa(
            "Upcoming events and workshops:\n"
            "1. View all events at /events\n"
            "2. Filter by category or date\n"
            "3. Click on an event for details\n"
            "4. Register if required",
            r"\bevents?\b|upcoming|workshops?",
        ),
        _qa(
            "Ministry of Innovation and Technology (MinT)\n"
            "Location: Addis Ababa, Ethiopia\n"
            "Website: https://www.mint.gov.et\n"
            "Email: contact@mint.gov.et\n"
            "Phone: +251 11 8 132 191",
            r"location|\bwhere\b|address|website",
        ),
    ],
    "am": [
        _qa(
            "የኢትዮጵያ የፈጠራና ቴክኖሎጂ ሚኒስቴር (MinT) ብሔራዊ ፈጠራና ዲጂታላይዜሽን ጥረቶችን ይመራል። "
            "ዝርዝር ለመረዳት http://www.mint.gov.et/ ይጎብኙ።",
            r"ስለ\s*ሚንት|ሚንት\s*ማን\s*ነው|የፈጠራ\s*እና\s*ቴክኖሎጂ\s*ሚኒስቴር",
        ),
        _qa(
            "እውቂያ MinT፦ ስልክ +251 11 8 132 191፣ ኢሜይል contact@mint.gov.et፣ ድር ገፅ https://www.mint.gov.et።",
            r"እውቂያ|ስልክ|ኢሜይል",
        ),
        _qa("የስራ ሰዓት፦ ሰኞ–አርብ 8:00–17:00 (የአካባቢ ሰዓት)።", r"ሰዓት|ስራ\s*ሰዓት|መክፈቻ"),
        _qa(
            "MinT ቴክኖሎጂ ማስተላለፊያ፣ ዲጂታላይዜሽን፣ ሙያ መመሪያ፣ የፋይናንስ ዕድሎች፣ ክስተቶች እና ማረጋገጫ ድጋፍ ይሰጣል።",
            r"ፕሮግራሞች|አገልግሎቶች|እድሎች",
        ),
        _qa(
            "እንደ ኢኖቬተር ለመረጋገጥ፦ 1) መገለጫዎ ይሙሉ 2) ፕሮጀክቶች ወይም GitHub ያቀርቡ 3) ዘርፍ ይምረጡ 4) በፖርታሉ ውስጥ ለግምገማ ያስገቡ።",
            r"ማረጋገጫ|ምንጭ\s*ማረጋገጫ|ኢኖቬተር\s*ማረጋገጫ",
        ),
        _qa(
            "መመዝገብ ለማድረግ /register ይጎብኙ። ከዚያ መገለጫዎን ይሙሉ እና ዝግጁ ሲሆኑ ማረጋገጫ ይጀምሩ።",
            r"መመዝገብ|ምዝገባ|አካውንት\s*መፍጠር",
        ),
        _qa(
            "ለመግባት /login ይጎብኙ። በኢሜይል/ቁልፍ ወይም በGoogle መግባት ይችላሉ። ከዚያ /app ወይም /admin ይመራሉ።",
            r"መግባት|ሎጊን|ኢንተር",
        ),
        _qa("ቀረበ የክስተት መረጃ ለማየት /events ይጎብኙ።", r"ክስተቶች|አስቀድሞ\s*የሚመጡ|upcoming"),
        _qa("ድር ገፅ፦ https://www.mint.gov.et። ሚኒስቴሩ በአዲስ አበባ ይገኛል።", r"አድራሻ|አካባቢ|ድር\s*ገፅ|ዌብሳይት"),
    ],
    "om": [
        _qa(
            "Ministeerri Innooveshinii fi Teeknooloojii Itoophiyaa (MinT) innooveeshinii, jijjiirama dijitaalaa "
            "fi guddina teeknooloojii tumsaa fi hooggana. Odeeffannoo dabalataa http://www.mint.gov.et/.",
            r"akka\s*ataattii\s*mint|maal\s*dha\s*mint|ministry\s*innovation",
        ),
        _qa(
            "Qunnamtii MinT: Bilbila +251 11 8 132 191, Imeelii contact@mint.gov.et, Website https://www.mint.gov.et.",
            r"qunnamtii|bilbila|imeelii|email|contact",
        ),
        _qa("Sa’aatii hojii: Wiixata–Jimaata 8:00–17:00 (yeroo biyyaalessaa).", r"sa'aatii|yeroo\s*hojii|banaa|cufaa"),
        _qa(
            "MinT tajaajila teeknooloojii dabarsuu, dijitaala gochuu, gorsaa ogeeyyii, carraa deeggarsa maallaqaa, "
            "taateewwan fi ragaa kennuu ni deeggara.",
            r"tajaajila|barbaachisummaa|carraa|programs|opportunities",
        ),
        _qa(
            "Mirkaneessa Innovator: 1) Piroofaayilii guutuu 2) Projeektoota/GitHub kenni "
            "3) Kutaa (sector) filadhu 4) Falmii (review)f ergi.",
            r"mirkaneessa|verify|ragaa\s*innovator",
        ),
        _qa(
            "Galmee haaraa gochuuf gara /register deemi; booda piroofaayilii guutii fi yeroo qophoofte mirkaneessa dhiheessi.",
            r"galmaa'uu|register|akkaa\s*account|sign\s*up",
        ),
        _qa(
            "Seenuu /login irratti raawwadhu; email/koodiin ykn Google fayyadami. Itti aansuun gara /app ykn /admin geessamta.",
            r"seenuu|login|sign\s*in",
        ),
        _qa("Taateewwan (events) dhufan ilaaluuf fuula /events ilaali.", r"taatee|event|upcoming"),
        _qa(
            "Website: https://www.mint.gov.et. Ministirichi Finfinnee, Itoophiyaa keessatti argama.",
            r"iddoo|eessa|website|saayitii",
        ),
    ],
}
