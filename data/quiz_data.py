# One Piece trivia for the quiz command. Options are keyed a-d.
QUIZ_QUESTIONS = [
    {
        "question": "What is the name of the fruit Luffy ate?",
        "options": {"a": "Mera Mera no Mi", "b": "Gomu Gomu no Mi", "c": "Hito Hito no Mi", "d": "Bara Bara no Mi"},
        "answer": "b",
    },
    {
        "question": "Who gave Luffy his straw hat?",
        "options": {"a": "Garp", "b": "Gol D. Roger", "c": "Shanks", "d": "Rayleigh"},
        "answer": "c",
    },
    {
        "question": "Which sword did Zoro receive from Kuina's father?",
        "options": {"a": "Wado Ichimonji", "b": "Sandai Kitetsu", "c": "Shusui", "d": "Enma"},
        "answer": "a",
    },
    {
        "question": "Where did Sanji work before joining the Straw Hats?",
        "options": {"a": "Loguetown", "b": "Syrup Village", "c": "Baratie", "d": "Drum Island"},
        "answer": "c",
    },
    {
        "question": "Who ruled Arlong Park?",
        "options": {"a": "Kuro", "b": "Arlong", "c": "Don Krieg", "d": "Buggy"},
        "answer": "b",
    },
    {
        "question": "Which island is Nami's hometown?",
        "options": {"a": "Cocoyashi Village", "b": "Foosha Village", "c": "Shells Town", "d": "Orange Town"},
        "answer": "a",
    },
    {
        "question": "Where was Gol D. Roger executed?",
        "options": {"a": "Marineford", "b": "Enies Lobby", "c": "Loguetown", "d": "Water 7"},
        "answer": "c",
    },
    {
        "question": "What is the name of the Straw Hats' first ship?",
        "options": {"a": "Thousand Sunny", "b": "Going Merry", "c": "Red Force", "d": "Oro Jackson"},
        "answer": "b",
    },
    {
        "question": "Which doctor joined the crew on Drum Island?",
        "options": {"a": "Kureha", "b": "Law", "c": "Hiluluk", "d": "Chopper"},
        "answer": "d",
    },
    {
        "question": "Which village does Usopp come from?",
        "options": {"a": "Syrup Village", "b": "Cocoyashi Village", "c": "Foosha Village", "d": "Kuraigana"},
        "answer": "a",
    },
    {
        "question": "What does a Log Pose do?",
        "options": {
            "a": "Detects Sea Kings", "b": "Records an island's magnetic field",
            "c": "Calls other ships", "d": "Measures bounties",
        },
        "answer": "b",
    },
    {
        "question": "What is the name of the portable snail phone?",
        "options": {"a": "Vivre Card", "b": "Eternal Pose", "c": "Den Den Mushi", "d": "Dial"},
        "answer": "c",
    },
]
