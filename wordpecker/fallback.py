"""
Offline learning content for WordPecker.

Used whenever the content provider is unavailable or returns something
unusable. Everything here is a pure function of its inputs over the tables
below, so the same level and language pair always produce the same words in
the same order.

Curated tables exist for Spanish and French, each row aligned with the
English headword at the same position. Any pair drawn from {en, es, fr} is
served from the tables (pivoting through the English row when neither side
is English); any other pair gets templated entries such as
"hello (de)" -> "hello (it)".
"""

from typing import Dict, List, NamedTuple, Optional, Tuple

from .config import FALLBACK_WORD_COUNT
from .logger import logger
from .models import LearningWord

# Ordered by level: level 1 is TOPICS[0]; levels past the end reuse the last topic.
TOPICS: List[str] = [
    "basic greetings and introductions",
    "common phrases and questions",
    "food and dining",
    "travel and directions",
    "daily activities and routines",
]

# (english, translation, pronunciation, example in target language, example in English)
_Row = Tuple[str, str, str, str, str]

_CURATED: Dict[str, List[List[_Row]]] = {
    "es": [
        [
            ("hello", "hola", "OH-lah", "¡Hola! ¿Cómo estás?", "Hello! How are you?"),
            ("goodbye", "adiós", "ah-DYOHS", "Adiós, hasta mañana.", "Goodbye, see you tomorrow."),
            ("please", "por favor", "pohr fah-VOHR", "Por favor, ayúdame.", "Please help me."),
            ("thank you", "gracias", "GRAH-syahs", "Muchas gracias por tu ayuda.", "Thank you very much for your help."),
            ("yes", "sí", "SEE", "Sí, estoy de acuerdo.", "Yes, I agree."),
            ("no", "no", "noh", "No, no quiero ir.", "No, I don't want to go."),
            ("excuse me", "disculpe", "dees-KOOL-peh", "Disculpe, ¿dónde está el baño?", "Excuse me, where is the bathroom?"),
            ("sorry", "lo siento", "loh SYEHN-toh", "Lo siento, fue mi culpa.", "I'm sorry, it was my fault."),
            ("good morning", "buenos días", "BWEH-nohs DEE-ahs", "¡Buenos días! ¿Cómo amaneciste?", "Good morning! How did you wake up?"),
            ("good night", "buenas noches", "BWEH-nahs NOH-chehs", "Buenas noches, que duermas bien.", "Good night, sleep well."),
        ],
        [
            ("my name is", "me llamo", "meh YAH-moh", "Me llamo Carlos.", "My name is Carlos."),
            ("nice to meet you", "mucho gusto", "MOO-choh GOOS-toh", "Mucho gusto, señora López.", "Nice to meet you, Mrs. López."),
            ("where", "dónde", "DOHN-deh", "¿Dónde está la estación?", "Where is the station?"),
            ("how much", "cuánto", "KWAHN-toh", "¿Cuánto cuesta el libro?", "How much does the book cost?"),
            ("I don't understand", "no entiendo", "noh ehn-TYEHN-doh", "Lo siento, no entiendo.", "Sorry, I don't understand."),
            ("I would like", "quisiera", "kee-SYEH-rah", "Quisiera un café, por favor.", "I would like a coffee, please."),
            ("what time is it", "qué hora es", "keh OH-rah ehs", "Perdone, ¿qué hora es?", "Excuse me, what time is it?"),
            ("see you later", "hasta luego", "AHS-tah LWEH-goh", "Hasta luego, amigos.", "See you later, friends."),
            ("help", "ayuda", "ah-YOO-dah", "Necesito ayuda, por favor.", "I need help, please."),
            ("of course", "claro", "KLAH-roh", "¡Claro que sí!", "Of course!"),
        ],
        [
            ("water", "agua", "AH-gwah", "Un vaso de agua, por favor.", "A glass of water, please."),
            ("bread", "pan", "pahn", "El pan está caliente.", "The bread is warm."),
            ("coffee", "café", "kah-FEH", "Tomo café cada mañana.", "I drink coffee every morning."),
            ("the menu", "el menú", "ehl meh-NOO", "¿Me trae el menú, por favor?", "Could you bring me the menu, please?"),
            ("the bill", "la cuenta", "lah KWEHN-tah", "La cuenta, por favor.", "The bill, please."),
            ("chicken", "pollo", "POH-yoh", "Quiero arroz con pollo.", "I want rice with chicken."),
            ("fish", "pescado", "pehs-KAH-doh", "El pescado está fresco.", "The fish is fresh."),
            ("apple", "manzana", "mahn-SAH-nah", "Como una manzana al día.", "I eat an apple a day."),
            ("breakfast", "desayuno", "deh-sah-YOO-noh", "El desayuno es a las ocho.", "Breakfast is at eight."),
            ("delicious", "delicioso", "deh-lee-SYOH-soh", "¡Este plato es delicioso!", "This dish is delicious!"),
        ],
        [
            ("train station", "estación de tren", "ehs-tah-SYOHN deh trehn", "La estación de tren está cerca.", "The train station is nearby."),
            ("airport", "aeropuerto", "ah-eh-roh-PWEHR-toh", "Vamos al aeropuerto en taxi.", "We are going to the airport by taxi."),
            ("ticket", "billete", "bee-YEH-teh", "Compré un billete de ida y vuelta.", "I bought a round-trip ticket."),
            ("left", "izquierda", "ees-KYEHR-dah", "Gire a la izquierda en el semáforo.", "Turn left at the traffic light."),
            ("right", "derecha", "deh-REH-chah", "El hotel está a la derecha.", "The hotel is on the right."),
            ("straight ahead", "todo recto", "TOH-doh REHK-toh", "Siga todo recto dos calles.", "Go straight ahead for two blocks."),
            ("map", "mapa", "MAH-pah", "¿Tiene un mapa de la ciudad?", "Do you have a map of the city?"),
            ("hotel", "hotel", "oh-TEHL", "Nuestro hotel tiene piscina.", "Our hotel has a pool."),
            ("passport", "pasaporte", "pah-sah-POHR-teh", "Necesito mi pasaporte.", "I need my passport."),
            ("street", "calle", "KAH-yeh", "Vivo en esta calle.", "I live on this street."),
        ],
        [
            ("to wake up", "despertarse", "dehs-pehr-TAR-seh", "Es difícil despertarse temprano.", "It is hard to wake up early."),
            ("to eat", "comer", "koh-MEHR", "Vamos a comer juntos.", "We are going to eat together."),
            ("to work", "trabajar", "trah-bah-HAR", "Tengo que trabajar mañana.", "I have to work tomorrow."),
            ("to sleep", "dormir", "dohr-MEER", "Quiero dormir ocho horas.", "I want to sleep for eight hours."),
            ("to read", "leer", "leh-EHR", "Me gusta leer por la noche.", "I like to read at night."),
            ("to cook", "cocinar", "koh-see-NAR", "Voy a cocinar la cena.", "I am going to cook dinner."),
            ("to walk", "caminar", "kah-mee-NAR", "Prefiero caminar al trabajo.", "I prefer to walk to work."),
            ("to study", "estudiar", "ehs-too-DYAR", "Necesito estudiar para el examen.", "I need to study for the exam."),
            ("to shower", "ducharse", "doo-CHAR-seh", "Es bueno ducharse después del deporte.", "It is good to shower after sports."),
            ("to clean", "limpiar", "leem-PYAR", "Hoy vamos a limpiar la casa.", "Today we are going to clean the house."),
        ],
    ],
    "fr": [
        [
            ("hello", "bonjour", "bohn-ZHOOR", "Bonjour, comment ça va?", "Hello, how are you?"),
            ("goodbye", "au revoir", "oh ruh-VWAHR", "Au revoir, à demain.", "Goodbye, see you tomorrow."),
            ("please", "s'il vous plaît", "seel voo PLEH", "S'il vous plaît, aidez-moi.", "Please help me."),
            ("thank you", "merci", "mehr-SEE", "Merci beaucoup pour votre aide.", "Thank you very much for your help."),
            ("yes", "oui", "WEE", "Oui, je suis d'accord.", "Yes, I agree."),
            ("no", "non", "nohn", "Non, je ne veux pas y aller.", "No, I don't want to go there."),
            ("excuse me", "excusez-moi", "ehk-skew-ZAY mwah", "Excusez-moi, où sont les toilettes?", "Excuse me, where is the bathroom?"),
            ("sorry", "désolé", "day-zoh-LAY", "Je suis désolé, c'était ma faute.", "I'm sorry, it was my fault."),
            ("good morning", "bonjour", "bohn-ZHOOR", "Bonjour! Avez-vous bien dormi?", "Good morning! Did you sleep well?"),
            ("good night", "bonne nuit", "bun NWEE", "Bonne nuit, dormez bien.", "Good night, sleep well."),
        ],
        [
            ("my name is", "je m'appelle", "zhuh mah-PEL", "Je m'appelle Claire.", "My name is Claire."),
            ("nice to meet you", "enchanté", "ahn-shahn-TAY", "Enchanté, madame Dubois.", "Nice to meet you, Mrs. Dubois."),
            ("where", "où", "OO", "Où est la gare?", "Where is the station?"),
            ("how much", "combien", "kohm-BYAN", "Combien coûte le livre?", "How much does the book cost?"),
            ("I don't understand", "je ne comprends pas", "zhuh nuh kohm-PRAHN pah", "Désolé, je ne comprends pas.", "Sorry, I don't understand."),
            ("I would like", "je voudrais", "zhuh voo-DREH", "Je voudrais un café, s'il vous plaît.", "I would like a coffee, please."),
            ("what time is it", "quelle heure est-il", "kel UHR eh-TEEL", "Pardon, quelle heure est-il?", "Excuse me, what time is it?"),
            ("see you later", "à plus tard", "ah plew TAR", "À plus tard, les amis.", "See you later, friends."),
            ("help", "aide", "EHD", "J'ai besoin d'aide, s'il vous plaît.", "I need help, please."),
            ("of course", "bien sûr", "byan SOOR", "Bien sûr, je viens!", "Of course, I'm coming!"),
        ],
        [
            ("water", "eau", "OH", "Un verre d'eau, s'il vous plaît.", "A glass of water, please."),
            ("bread", "pain", "PAN", "Le pain est chaud.", "The bread is warm."),
            ("coffee", "café", "kah-FAY", "Je bois du café chaque matin.", "I drink coffee every morning."),
            ("the menu", "la carte", "lah KART", "Pouvez-vous m'apporter la carte?", "Could you bring me the menu?"),
            ("the bill", "l'addition", "lah-dee-SYOHN", "L'addition, s'il vous plaît.", "The bill, please."),
            ("chicken", "poulet", "poo-LAY", "Je voudrais du poulet avec du riz.", "I would like chicken with rice."),
            ("fish", "poisson", "pwah-SOHN", "Le poisson est frais.", "The fish is fresh."),
            ("apple", "pomme", "POM", "Je mange une pomme par jour.", "I eat an apple a day."),
            ("breakfast", "petit déjeuner", "puh-TEE day-zhuh-NAY", "Le petit déjeuner est à huit heures.", "Breakfast is at eight."),
            ("delicious", "délicieux", "day-lee-SYUH", "Ce plat est délicieux!", "This dish is delicious!"),
        ],
        [
            ("train station", "gare", "GAR", "La gare est tout près.", "The train station is nearby."),
            ("airport", "aéroport", "ah-ay-roh-POR", "Nous allons à l'aéroport en taxi.", "We are going to the airport by taxi."),
            ("ticket", "billet", "bee-YEH", "J'ai acheté un billet aller-retour.", "I bought a round-trip ticket."),
            ("left", "gauche", "GOHSH", "Tournez à gauche au feu.", "Turn left at the traffic light."),
            ("right", "droite", "DRWAHT", "L'hôtel est à droite.", "The hotel is on the right."),
            ("straight ahead", "tout droit", "too DRWAH", "Continuez tout droit.", "Keep going straight ahead."),
            ("map", "plan", "PLAHN", "Avez-vous un plan de la ville?", "Do you have a map of the city?"),
            ("hotel", "hôtel", "oh-TEL", "Notre hôtel a une piscine.", "Our hotel has a pool."),
            ("passport", "passeport", "pahs-POR", "J'ai besoin de mon passeport.", "I need my passport."),
            ("street", "rue", "REW", "J'habite dans cette rue.", "I live on this street."),
        ],
        [
            ("to wake up", "se réveiller", "suh ray-vay-YAY", "Il est difficile de se réveiller tôt.", "It is hard to wake up early."),
            ("to eat", "manger", "mahn-ZHAY", "Allons manger ensemble.", "We are going to eat together."),
            ("to work", "travailler", "trah-vah-YAY", "Je dois travailler demain.", "I have to work tomorrow."),
            ("to sleep", "dormir", "dor-MEER", "Je veux dormir huit heures.", "I want to sleep for eight hours."),
            ("to read", "lire", "LEER", "J'aime lire le soir.", "I like to read at night."),
            ("to cook", "cuisiner", "kwee-zee-NAY", "Je vais cuisiner le dîner.", "I am going to cook dinner."),
            ("to walk", "marcher", "mar-SHAY", "Je préfère marcher jusqu'au travail.", "I prefer to walk to work."),
            ("to study", "étudier", "ay-tew-DYAY", "Je dois étudier pour l'examen.", "I need to study for the exam."),
            ("to shower", "se doucher", "suh doo-SHAY", "C'est agréable de se doucher après le sport.", "It is nice to shower after sports."),
            ("to clean", "nettoyer", "neh-twah-YAY", "Aujourd'hui nous allons nettoyer la maison.", "Today we are going to clean the house."),
        ],
    ],
}

# English headwords per topic, shared by every table.
HEADWORDS: List[List[str]] = [[row[0] for row in topic] for topic in _CURATED["es"]]

CURATED_LANGUAGES = frozenset(["en"]) | frozenset(_CURATED)


class _Side(NamedTuple):
    word: str
    pronunciation: Optional[str]
    example: str


def topic_index(level_id: int) -> int:
    """Index into TOPICS for a level, clamped to the table."""
    return min(max(level_id, 1), len(TOPICS)) - 1


def topic_for_level(level_id: int) -> str:
    return TOPICS[topic_index(level_id)]


def _side(language: str, topic: int, position: int) -> _Side:
    """One language's view of a curated row."""
    if language == "en":
        row = _CURATED["es"][topic][position]
        return _Side(row[0], None, row[4])
    _, translation, pronunciation, example, _ = _CURATED[language][topic][position]
    return _Side(translation, pronunciation, example)


class FallbackContentGenerator:
    """Deterministic stand-in for the content provider. Never raises."""

    def has_curated_pair(self, source_language: str, target_language: str) -> bool:
        source, target = source_language.lower(), target_language.lower()
        return source != target and source in CURATED_LANGUAGES and target in CURATED_LANGUAGES

    def generate(self, level_id: int, source_language: str, target_language: str) -> List[LearningWord]:
        """Ten learning words for a level, always the same for the same inputs."""
        topic = topic_index(level_id)
        source, target = source_language.lower(), target_language.lower()

        if not self.has_curated_pair(source, target):
            logger.debug(f"No curated words for {source}->{target}, using templated entries")
            return [
                LearningWord(original=f"{word} ({source})", translation=f"{word} ({target})")
                for word in HEADWORDS[topic][:FALLBACK_WORD_COUNT]
            ]

        words = []
        for position in range(min(FALLBACK_WORD_COUNT, len(HEADWORDS[topic]))):
            src = _side(source, topic, position)
            tgt = _side(target, topic, position)
            words.append(LearningWord(
                original=src.word,
                translation=tgt.word,
                pronunciation=tgt.pronunciation,
                examples=[tgt.example, src.example],
            ))
        return words

    def translate(self, word: str, source_language: str, target_language: str) -> LearningWord:
        """Single-word lookup; unknown words get a templated translation."""
        source, target = source_language.lower(), target_language.lower()
        needle = word.strip().lower()

        if self.has_curated_pair(source, target):
            for topic in range(len(TOPICS)):
                for position in range(len(HEADWORDS[topic])):
                    src = _side(source, topic, position)
                    if src.word.lower() != needle:
                        continue
                    tgt = _side(target, topic, position)
                    return LearningWord(
                        original=word.strip(),
                        translation=tgt.word,
                        pronunciation=tgt.pronunciation,
                        examples=[tgt.example, src.example],
                    )

        return LearningWord(original=word.strip(), translation=f"{word.strip()} ({target})")
