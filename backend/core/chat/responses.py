# core/chat/responses.py
# -*- coding: utf-8 -*-
"""
聊天组件的本地化文案与关键词表（en / am / om）。
"""

from __future__ import annotations

from typing import Dict, List, Tuple

VERIFICATION_STEPS = (
    "1. Go to `/app`, the Home page.\n"
    "2. Click Apply Now.\n"
    "3. Fill the required information.\n"
    "4. Submit for review."
)

MULTILINGUAL_NOTE = "You can chat in English, Amharic, or Afan Oromo. Use the top-right selector to switch."

PENDING_TEXT = "Thinking..."

WELCOME: Dict[str, str] = {
    "en": "Hi! I'm MinT Assistant. You can chat in English, Amharic, or Afan Oromo. Use the language selector to switch. Ask about verification, projects, funding, or events.",
    "am": "ሰላም! የMinT አስስታንት ነኝ። በእንግሊዝኛ፣ አማርኛ ወይም አፋን ኦሮሞ መወያየት ትችላላችሁ። ቋንቋን ለመቀየር ከላይ ያለውን መምረጫ ይጠቀሙ። ስለ ማረጋገጫ፣ ፕሮጀክቶች፣ ፋይናንስ እና ኢቫንቶች ጠይቁ።",
    "om": "Akkam! Ani MinT Assistant. Afaan Ingilizii, Amaariffaa, ykn Afaan Oromoo waliin haasaʼuu dandeessu. Afaan jijjiiruuf gara gubbaa mirgaa jiran filannoo fayyadamaa. Mirkaneessa, projektoota, deeggarsa maallaqa fi eventoota gaafadhu.",
}

LANGUAGE_SWITCHED: Dict[str, str] = {
    "en": "Language set. You can chat in this language now.",
    "am": "ቋንቋ ተቀይሯል። አሁን በዚህ ቋንቋ መወያየት ትችላለህ/ሽ።",
    "om": "Afaan filatameera. Amma afaan kanaan na waliin haasa’i.",
}

SAFETY: Dict[str, str] = {
    "en": "I’m here to help. Please ask a question about verification, projects, funding, or events.",
    "am": "ለርዳታ እዚህ ነኝ። እባክዎ ስለ ማረጋገጫ፣ ፕሮጀክቶች፣ ፋይናንስ ወይም ኢቫንቶች ጥያቄ ይጠይቁ።",
    "om": "Si gargaaruuf as jira. Mirkaneessa, projektoota, deeggarsa ykn eventoota irratti na gaafadhu.",
}

GREETING: Dict[str, str] = {
    "en": "Hi! How can I help?",
    "am": "ሰላም! እንዴት ልርዳዎ?",
    "om": "Akkam! Maal si gargaaruu?",
}

CONTACT_REFUSAL: Dict[str, str] = {
    "en": "For privacy, I can’t share personal contacts. Please use official channels: contact@mint.gov.et or +251 11 813 2191. Visit http://www.mint.gov.et",
    "am": "ስለ ግላዊነት የግል መገኛ መረጃ አካፍልም። ኦፊሴላዊ መንገዶችን ይጠቀሙ፡ contact@mint.gov.et ወይም +251 11 813 2191። ይመልከቱ http://www.mint.gov.et",
    "om": "Sababa icciitii qofaa, qunnamtii dhuunfaa hin kennu. Karaalee sirrii: contact@mint.gov.et ykn +251 11 813 2191. Daawwadhaa http://www.mint.gov.et",
}

NOT_HUMAN: Dict[str, str] = {
    "en": "I’m an AI assistant for the MinT Innovation Portal. I don’t have feelings, but I can help with verification, projects, funding, or events.",
    "am": "እኔ የMinT Innovation Portal ረዳት ነው ፣ ስሜት የለኝም። ግን ስለ ማረጋገጫ፣ ፕሮጀክቶች፣ ፋይናንስ ወይም ኢቫንቶች ልርዳ እችላለሁ።",
    "om": "Ani deeggaraa AI MinT Innovation Portal ti; yaada qalbii hin qabu, garuu mirkaneessa, projektoota, deeggarsa maallaqaa fi eventoota irratti si gargaaruu nan dandaʼa.",
}

HELP_MENU: Dict[str, str] = {
    "en": "I can help with verification, projects, funding, and events. Ask a specific question or pick a suggestion below.",
    "am": "ስለ ማረጋገጫ፣ ፕሮጀክቶች፣ ፋይናንስ እና ኢቫንቶች ልርዳ እችላለሁ። በተለይ ጠይቁ ወይም ከታች ምክሮችን ይምረጡ።",
    "om": "Mirkaneessa, projektoota, deeggarsa fi eventoota irratti si gargaaruu nan dandaʼa. Gaaffii addaa gaafadhu yookaan filannoo gadi aanaa fili.",
}

FALLBACK: Dict[str, str] = {
    "en": "Please rephrase with more detail, for example “how to verify”, “create project”, “upcoming events”.",
    "am": "እባክዎን በዝርዝር ይግለጹ፤ ምሳሌ፡ “እንዴት ልረጋገጥ”, “ፕሮጀክት መፍጠር”, “ቀረባ ኢቫንቶች”።",
    "om": "Ilaalcha balʼinaan ibsi, fakkeenyaaf: “akkamitti mirkanaaʼa”, “projekt uumuu”, “eventoota dhufu”.",
}

CLARIFY: Dict[str, str] = {
    "en": "Please clarify your question: verification, projects, funding, or events.",
    "am": "ጥያቄዎን ይግለጹ፦ ማረጋገጫ፣ ፕሮጀክት፣ ፋይናንስ ወይም ኢቫንቶች።",
    "om": "Gaaffii kee iftoomsi: mirkaneessa, projektoota, deeggarsa, yookaan eventoota.",
}

SUGGESTIONS: Dict[str, List[str]] = {
    "en": [
        "How do I get verified?",
        "Create a project",
        "Upcoming events",
        "Request funding",
        "Official website",
    ],
    "am": [
        "እባክዎ ስለ ማረጋገጫ አስተያየት ላኩኝ።",
        "ፕሮጀክት መፍጠር",
        "ቀረባ ኢቫንቶች",
        "ፋይናንስ መጠየቅ",
        "የመንግሥት ድረ-ገጽ",
    ],
    "om": [
        "Akkamitti mirkanaaʼa?",
        "Projekt uumuu",
        "Eventoota dhufu",
        "Deeggarsa maallaqa kadhachuu",
        "Website olaanaa",
    ],
}

# 顺序有意义：第一个命中的关键词胜出
KEYWORD_ANSWERS: Tuple[Tuple[str, str], ...] = (
    # getting started
    ("how to use", "Quick start: 1) Create an account or log in 2) Complete your profile 3) Apply for verification 4) Once verified, post projects and join events. Use the top navigation: Home, Projects, Events, Innovators, Profile."),
    ("login", "Go to /login, sign in with email/password or continue with Google. After login, you'll be redirected to /app or /admin based on your role."),
    ("register", "Open /register and fill in your details. You can later complete your profile and apply for verification from your profile page."),
    ("profile", "Profile lets you update your info and avatar. Access it via the top nav: Profile. Keep it complete before applying for verification."),
    # verification & projects
    ("how to verify", VERIFICATION_STEPS),
    ("get verified", VERIFICATION_STEPS),
    ("verified", VERIFICATION_STEPS),
    ("verification", VERIFICATION_STEPS),
    ("apply now", VERIFICATION_STEPS),
    ("post project", "After verification, go to Projects > Create Project. Fill title, description, sector, and upload images. Submit to publish so it appears on /projects and /app."),
    ("github", "Connecting GitHub helps us validate your activity and showcase your work. Go to Profile to link your GitHub account."),
    # events
    ("create event", "Admins can create events at /admin/create-event. Fill in title, description, dates, add images by drag and drop, and publish. Images are uploaded and will display on the Events page."),
    ("events page", "Visit /events to see upcoming events. Click an event to view details. Admins can edit or delete events from their pages."),
    ("upload images", "When creating events or projects, use the image uploader to attach PNG/JPG files. A preview appears before submission."),
    # organization info
    ("internship office", "The Ministry of Innovation and Technology internship office is in Addis Ababa, main building. Hours: 8:00–17:00, Mon–Fri."),
    ("sectors", "We support innovation in: Health, Agriculture, Education, Finance, Transportation, Environment, Energy, and Technology."),
    ("mint", "MiNT stands for the Ministry of Innovation and Technology of Ethiopia. Official website: https://www.mint.gov.et"),
    ("ministry of innovation and technology", "The Ministry of Innovation and Technology, Ethiopia. Official website: https://www.mint.gov.et"),
    ("official website", "Official website of Ethiopia’s Ministry of Innovation and Technology: https://www.mint.gov.et"),
    ("website", "Official website of Ethiopia’s Ministry of Innovation and Technology: https://www.mint.gov.et"),
    ("name", "Official name: Ministry of Innovation and Technology, Ethiopia."),
    ("location", "MinT Headquarters: Addis Ababa, Ethiopia. Hours: 8:00–17:00, Monday–Friday."),
    ("address", "Addis Ababa, Ethiopia – Ministry of Innovation and Technology main building."),
    ("office hours", "Office hours: Monday–Friday, 8:00 AM – 5:00 PM East Africa Time."),
    ("contact", "General contact: contact@mint.gov.et, Phone: +251 11 813 2191. Official site: https://www.mint.gov.et"),
    ("email", "Official email: contact@mint.gov.et"),
    ("phone", "+251 11 813 2191"),
    ("mission", "MiNT’s mission is to drive national innovation, science, and technology for sustainable development and digital transformation in Ethiopia."),
    ("vision", "MiNT’s vision: a competitive, innovative Ethiopia empowered by science and technology."),
    ("innovation technology office", "The Innovation and Technology Office coordinates programs, technology transfer, capacity building, and national innovation initiatives."),
)
