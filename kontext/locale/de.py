"""German locale table."""

import re

from kontext.locale.base import DatePattern, IntentPattern, Locale, PromptLabels


def _ci(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


_WEEKDAY = r"(montag|dienstag|mittwoch|donnerstag|freitag|samstag|sonntag)"

_FOLLOW_UP_INSTRUCTION = """WICHTIG: Dies ist eine FOLGEFRAGE zu einer laufenden Konversation!
Der Nutzer bezieht sich auf vorherige Nachrichten - auch wenn er das Thema nicht explizit wiederholt.
Nutze den Konversationsverlauf, um zu verstehen, WORÜBER der Nutzer spricht.

{context}

Die aktuelle Frage "{query}" bezieht sich auf das oben besprochene Thema.
Beantworte die Frage im Kontext der bisherigen Konversation.
"""

_GENERAL_INSTRUCTION = """Der Nutzer führt eine Konversation. Hier ist der bisherige Verlauf:

{context}

Beantworte die folgende Anfrage. Falls sie sich auf vorherige Themen bezieht, nutze den Kontext.
"""

GERMAN = Locale(
    name="de",
    stop_words=frozenset(
        {
            "der", "die", "das", "ein", "eine", "und", "oder", "aber", "wenn",
            "weil", "für", "mit", "von", "zu", "an", "in", "auf", "ist", "sind",
            "hat", "haben", "was", "wer", "wie", "wo", "wann", "warum", "ich",
            "du", "er", "sie", "es", "wir", "ihr", "mich", "mir", "über", "nach",
        }
    ),
    document_stop_words=frozenset(
        {
            "der", "die", "das", "den", "dem", "des",
            "ein", "eine", "einer", "einem", "einen",
            "und", "oder", "aber", "wenn", "weil", "dass",
            "ist", "sind", "war", "waren", "wird", "werden",
            "hat", "haben", "hatte", "hatten",
            "mit", "von", "zu", "bei", "für", "auf", "in", "an",
            "ich", "du", "er", "sie", "es", "wir", "ihr",
            "mein", "dein", "sein", "unser", "euer",
            "nicht", "auch", "nur", "noch", "schon", "sehr",
            "über", "unter", "nach", "vor", "zwischen",
            "alles", "alle", "allem", "allen",
            "kann", "kannst", "können", "könnte",
            "dazu", "dabei", "damit", "darüber",
            "gibt", "gab", "geben",
        }
    ),
    question_words=frozenset({"wer", "was", "wie", "wo", "wann", "warum", "welche", "welcher"}),
    people_words=frozenset(
        {
            "wer", "person", "personen", "team", "teilnehmer", "mitglied",
            "mitglieder", "beteiligt", "teilgenommen", "mitarbeiter", "leiter",
            "leitung",
        }
    ),
    topic_stop_words=frozenset(
        {
            "der", "die", "das", "den", "dem", "des", "ein", "eine", "einer",
            "und", "oder", "aber", "wenn", "weil", "dass", "ist", "sind", "war",
            "hat", "haben", "mit", "von", "zu", "bei", "für", "auf", "in", "an",
            "ich", "du", "wir", "sie", "es", "nicht", "auch", "nur", "noch",
            "was", "wer", "wie", "wo", "wann", "warum", "kann", "werden", "wurde",
            "gibt", "dazu", "dabei", "damit", "darüber", "hier", "dort", "jetzt",
            "dann", "also", "sehr", "mehr", "alle", "alles", "keine", "kein",
        }
    ),
    capitalized_phrase=re.compile(r"\b[A-ZÄÖÜ][a-zäöüß]+(?:\s+[A-ZÄÖÜ][a-zäöüß]+)*"),
    quoted_term=re.compile(r'"([^"]+)"'),
    topic_indicator=_ci(
        r"(?:Projekt|Project|über|bezüglich|betreffend|zum Thema)\s+([A-ZÄÖÜa-zäöüß0-9\-_]+)"
    ),
    entity_indicators=(
        _ci(r"\büber\s+(\w+(?:\s+\w+)?)"),
        _ci(r"\bmit\s+(\w+(?:\s+\w+)?)"),
        _ci(r"\bfür\s+(\w+(?:\s+\w+)?)"),
        _ci(r"\bprojekt\s+(\w+(?:\s+\w+)?)"),
        _ci(r"\bvon\s+(\w+(?:\s+\w+)?)"),
    ),
    implicit_follow_up=(
        _ci(r"^wer\s+(hat|ist|war|sind|waren|noch|sonst|alles)"),
        _ci(r"^was\s+(ist|war|sind|waren|gibt|noch|genau)"),
        _ci(r"^wie\s+(viele?|lange?|oft|genau|war|ist)"),
        _ci(r"^wann\s+(ist|war|wird|wurde|hat)"),
        _ci(r"^wo\s+(ist|war|wird|wurde|hat)"),
        _ci(r"^warum\s+(ist|war|wird|wurde|hat)"),
        _ci(r"^welche[rs]?\s"),
        _ci(r"^gibt\s+es\s+(noch|weitere|andere)"),
        _ci(r"^waren?\s+(da\s+)?(noch|keine|weitere)"),
        _ci(r"^und\s"),
        _ci(r"^aber\s"),
        _ci(r"^also\s"),
        _ci(r"^sonst\s"),
        _ci(r"^außerdem"),
        _ci(r"^zusätzlich"),
        _ci(r"^noch\s+(mehr|weitere|andere)"),
        _ci(r"^mehr\s+(dazu|davon|details)"),
        _ci(r"^genauer"),
        _ci(r"^erkläre?\s+(das|mehr|genauer)"),
    ),
    follow_up=(
        _ci(r"^und\s"),
        _ci(r"^was\s+ist\s+damit"),
        _ci(r"^wie\s+meinst\s+du"),
        _ci(r"^kannst\s+du"),
        _ci(r"^mehr\s+dazu"),
        _ci(r"^genauer"),
        _ci(r"^erkl[aä]r"),
        _ci(r"^warum"),
        _ci(r"^wieso"),
        _ci(r"^noch\s+eine"),
        _ci(r"^dazu"),
        _ci(r"^wer\s+(noch|sonst|alles|hat)"),
        _ci(r"^was\s+(noch|sonst|genau)"),
        _ci(r"^gibt\s+es"),
        _ci(r"^waren\s+(da\s+)?(noch|keine)"),
    ),
    intent_patterns=(
        IntentPattern(
            "birthday_query",
            (
                _ci(r"wer\s+hat\s+(?:demnächst\s+)?geburtstag"),
                _ci(r"geburtstage?\s+(?:diese|nächste)\s+woche"),
                _ci(r"wann\s+hat\s+(?P<entity>.+)\s+geburtstag"),
                _ci(r"geburtstag\s+von\s+(?P<entity>.+)"),
            ),
        ),
        IntentPattern(
            "schedule_query",
            (
                _ci(r"was\s+steht\s+(?P<entity>heute|morgen|diese\s+woche|nächste\s+woche)\s+an"),
                _ci(r"wann\s+ist\s+(?P<entity>.+)"),
                _ci(r"termine?\s+(?P<entity>heute|morgen|diese\s+woche)"),
                _ci(r"kalender\s+(?P<entity>heute|morgen)"),
                _ci(r"meine\s+termine"),
            ),
        ),
        IntentPattern(
            "person_query",
            (
                _ci(r"was\s+weiß\s+ich\s+über\s+(?P<entity>.+)"),
                _ci(r"wer\s+ist\s+(?P<entity>.+)"),
                _ci(r"informationen?\s+(?:zu|über)\s+(?P<entity>.+)"),
                _ci(r"erzähl\s+mir\s+(?:etwas\s+)?über\s+(?P<entity>.+)"),
            ),
        ),
        IntentPattern(
            "project_query",
            (
                _ci(r"status\s+projekt\s+(?P<entity>.+)"),
                _ci(r"wie\s+steht\s+es\s+(?:um|mit)\s+projekt\s+(?P<entity>.+)"),
                _ci(r"projekt\s+(?P<entity>.+)\s+status"),
                _ci(r"stand\s+(?:von\s+)?projekt\s+(?P<entity>.+)"),
            ),
        ),
        IntentPattern(
            "knowledge_store",
            (
                _ci(r"^merke?\s*:\s*(?P<entity>.+)"),
                _ci(r"speicher(?:e|n)?\s*:\s*(?P<entity>.+)"),
                _ci(r"notier(?:e|en)?\s*:\s*(?P<entity>.+)"),
                _ci(r"erinner(?:e|n)?\s*mich\s*:\s*(?P<entity>.+)"),
            ),
        ),
        IntentPattern(
            "email_compose",
            (
                _ci(r"^mail\s+an\s+(?P<entity>.+)"),
                _ci(r"^email\s+an\s+(?P<entity>.+)"),
                _ci(r"schreib(?:e)?\s+(?:eine\s+)?mail\s+an\s+(?P<entity>.+)"),
                _ci(r"schreib(?:e)?\s+(?:eine\s+)?email\s+an\s+(?P<entity>.+)"),
            ),
        ),
        IntentPattern(
            "todo_create",
            (
                _ci(r"^aufgabe\s*:\s*(?P<entity>.+)"),
                _ci(r"^todo\s*:\s*(?P<entity>.+)"),
                _ci(r"neue\s+aufgabe\s*:\s*(?P<entity>.+)"),
                _ci(r"erstell(?:e)?\s+(?:eine\s+)?aufgabe\s*:\s*(?P<entity>.+)"),
            ),
        ),
        IntentPattern(
            "knowledge_delete",
            (
                _ci(r"^vergiss\s+(?P<entity>.+)"),
                _ci(r"^lösche?\s+(?P<entity>.+)"),
                _ci(r"entfern(?:e|en)?\s+(?P<entity>.+)\s+aus\s+(?:der\s+)?knowledge\s+base"),
            ),
        ),
    ),
    question_indicators=(
        re.compile(r"\?$"),
        _ci(r"^(?:was|wer|wann|wo|wie|warum|weshalb|wieso|welche[rs]?)\s+"),
        _ci(r"^(?:ist|sind|hat|haben|kann|können|darf|dürfen|soll|sollte)\s+"),
        _ci(r"^(?:gibt\s+es|existiert|kennt|weiß)"),
    ),
    question_patterns=(
        _ci(r"^was\s+(ist|sind|war|waren|macht|machen|genau|weiß)"),
        _ci(r"^wer\s+(ist|sind|war|waren|hat|haben)"),
        _ci(r"^wie\s+(ist|sind|war|funktioniert|geht|viele?)"),
        _ci(r"^wo\s+(ist|sind|war|liegt)"),
        _ci(r"^wann\s+(ist|war|wird|hat)"),
        _ci(r"^warum\s+(ist|war|hat|haben)"),
        _ci(r"^welche[rs]?\s"),
        _ci(r"^gibt\s+es"),
        re.compile(r"\?$"),
    ),
    request_patterns=(
        _ci(r"^(bitte\s+)?(schreib|erstell|generier|mach|gib|zeig|informier|erkläre?|nenn|benenn|list)"),
        _ci(r"^kannst\s+du\s+(mir\s+)?(schreib|erstell|sag|gib|zeig|informier|erkläre?)"),
        _ci(r"^ich\s+(möchte|will|brauche)\s+(eine?n?\s+)?(e-?mail|nachricht|liste|übersicht)"),
        _ci(r"^(bitte\s+)?informiere?\s+mich"),
    ),
    storage_request=(
        _ci(r"merk(e|t)?\s+(dir|euch)"),
        _ci(r"speicher(e|t|n)?"),
        _ci(r"notier(e|t)?"),
        _ci(r"bitte\s+(be)?halt(e|en)?"),
    ),
    weekdays={
        "montag": 0,
        "dienstag": 1,
        "mittwoch": 2,
        "donnerstag": 3,
        "freitag": 4,
        "samstag": 5,
        "sonntag": 6,
    },
    day_names=("Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag", "Samstag", "Sonntag"),
    month_names=(
        "Januar", "Februar", "März", "April", "Mai", "Juni",
        "Juli", "August", "September", "Oktober", "November", "Dezember",
    ),
    relative_dates=(
        DatePattern(_ci(r"\bheute\b"), "today"),
        DatePattern(_ci(r"\bmorgen\b"), "tomorrow"),
        DatePattern(_ci(r"\bübermorgen\b"), "day_after_tomorrow"),
        DatePattern(_ci(rf"\bn[aä]chste[rn]?\s+{_WEEKDAY}\b"), "next_weekday"),
        DatePattern(_ci(rf"\b[uü]bern[aä]chste[rn]?\s+{_WEEKDAY}\b"), "weekday_after_next"),
        DatePattern(_ci(rf"\bam\s+{_WEEKDAY}\b"), "next_weekday"),
        DatePattern(_ci(r"\bin\s+(\d+)\s+tag(?:en|e)?\b"), "in_days"),
        DatePattern(_ci(r"\bin\s+(\d+)\s+woche(?:n)?\b"), "in_weeks"),
        DatePattern(_ci(r"\bin\s+(\d+)\s+monat(?:en|e)?\b"), "in_months"),
        DatePattern(_ci(r"\bn[aä]chste\s+woche\b"), "next_week"),
        DatePattern(_ci(r"\b(?:ende\s+(?:der\s+)?woche|wochenende)\b"), "end_of_week"),
        DatePattern(_ci(r"\bmitte\s+(?:der\s+)?woche\b"), "middle_of_week"),
    ),
    absolute_date=re.compile(r"\b\d{1,2}\.\d{1,2}\.(?:\d{2,4})?"),
    appointment_label="Termin",
    labels=PromptLabels(
        knowledge_heading="Relevanter Kontext aus der Knowledge Base:",
        document_heading="Relevanter Kontext aus Dokumenten:",
        live_general_title="Relevanter Kontext",
        user_role="NUTZER",
        assistant_role="ASSISTENT",
        topic_summary_prefix="Hauptthemen der Konversation:",
        history_heading="Bisheriger Gesprächsverlauf:",
        follow_up_instruction=_FOLLOW_UP_INSTRUCTION,
        general_instruction=_GENERAL_INSTRUCTION,
        document="📄 Dokument",
        summary="Zusammenfassung",
        topics="Themen",
        relationships="Beziehungen",
        key_facts="Wichtige Fakten",
        action_items="Aufgaben",
        decisions="Entscheidungen",
        deadlines="Fristen",
        entity_types={
            "person": "Personen/Teammitglieder",
            "company": "Unternehmen",
            "project": "Projekte",
            "technology": "Technologien",
            "deadline": "Termine",
            "decision": "Entscheidungen",
            "other": "Sonstiges",
        },
        other_entities="other",
    ),
)
