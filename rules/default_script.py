"""
Default Script - Built-in "doctor" conversation script
======================================================

Used when no script file is configured. The same structure can be written
to YAML with ``python main.py --export-script PATH`` and edited.
"""

DEFAULT_SCRIPT = {
    "greetings": [
        "How do you do. Please tell me your problem.",
        "Hello. What would you like to talk about today?",
    ],
    "goodbyes": [
        "Goodbye. It was nice talking to you.",
        "Goodbye. Take care of yourself.",
    ],
    "quit_words": ["bye", "goodbye", "quit", "exit"],
    "fallbacks": [
        "I am not sure I understand you fully.",
        "Please go on.",
        "What does that suggest to you?",
        "Do you feel strongly about discussing such things?",
        "That is interesting. Please continue.",
        "Tell me more about that.",
    ],
    "memory_templates": [
        "Let us discuss further why your {1}.",
        "Earlier you said your {1}.",
        "But your {1}.",
        "Does that have anything to do with the fact that your {1}?",
    ],
    "substitutions": {
        "dont": "do not",
        "cant": "can not",
        "wont": "will not",
        "im": "i am",
        "youre": "you are",
        "recollect": "remember",
        "dreamt": "dreamed",
        "dreams": "dream",
        "mom": "mother",
        "dad": "father",
    },
    "synonyms": [
        {"canonical": "family", "members": [
            "mother", "father", "sister", "brother", "wife", "husband", "children", "child",
        ]},
        {"canonical": "belief", "members": ["feel", "think", "believe", "wish"]},
        {"canonical": "desire", "members": ["want", "need"]},
        {"canonical": "sad", "members": ["unhappy", "depressed", "sick", "miserable"]},
        {"canonical": "happy", "members": ["elated", "glad", "better"]},
        {"canonical": "computer", "members": ["computers", "machine", "machines"]},
        {"canonical": "perhaps", "members": ["maybe", "probably"]},
        {"canonical": "what", "members": ["how", "when"]},
        {"canonical": "everyone", "members": ["everybody", "nobody", "noone"]},
        {"canonical": "hello", "members": ["hi", "hey"]},
        {"canonical": "yes", "members": ["yeah", "yep"]},
        {"canonical": "no", "members": ["nope", "nah"]},
        {"canonical": "alike", "members": ["same", "similar", "identical"]},
    ],
    "rules": [
        {
            "keyword": "computer",
            "rank": 50,
            "decompositions": [
                {"pattern": "*", "reassemblies": [
                    "Do computers worry you?",
                    "Why do you mention computers?",
                    "What do you think machines have to do with your problem?",
                    "Don't you think computers can help people?",
                    "What about machines worries you?",
                ]},
            ],
        },
        {
            "keyword": "name",
            "rank": 15,
            "decompositions": [
                {"pattern": "*", "reassemblies": [
                    "I am not interested in names.",
                    "I've told you before, I don't care about names. Please continue.",
                ]},
            ],
        },
        {
            "keyword": "alike",
            "rank": 10,
            "decompositions": [
                {"pattern": "*", "reassemblies": [
                    "In what way?",
                    "What resemblance do you see?",
                    "What does that similarity suggest to you?",
                    "What other connections do you see?",
                    "Could there really be some connection?",
                ]},
            ],
        },
        {
            "keyword": "remember",
            "rank": 5,
            "decompositions": [
                {"pattern": "* i remember *", "reassemblies": [
                    "Do you often think of {1}?",
                    "Does thinking of {1} bring anything else to mind?",
                    "What else do you remember?",
                    "Why do you remember {1} just now?",
                ]},
                {"pattern": "* do you remember *", "reassemblies": [
                    "Did you think I would forget {1}?",
                    "Why do you think I should recall {1} now?",
                    "What about {1}?",
                    "=what",
                ]},
                {"pattern": "*", "reassemblies": [
                    "What is it about remembering that matters to you?",
                ]},
            ],
        },
        {
            "keyword": "dreamed",
            "rank": 4,
            "decompositions": [
                {"pattern": "* i dreamed *", "reassemblies": [
                    "Really, {1}?",
                    "Have you ever fantasized {1} while you were awake?",
                    "Have you ever dreamed {1} before?",
                    "=dream",
                ]},
                {"pattern": "*", "reassemblies": ["=dream"]},
            ],
        },
        {
            "keyword": "dream",
            "rank": 3,
            "decompositions": [
                {"pattern": "*", "reassemblies": [
                    "What does that dream suggest to you?",
                    "Do you dream often?",
                    "What persons appear in your dreams?",
                    "Do you believe that dreams have something to do with your problem?",
                ]},
            ],
        },
        {
            "keyword": "if",
            "rank": 3,
            "decompositions": [
                {"pattern": "* if *", "reassemblies": [
                    "Do you think it is likely that {1}?",
                    "Do you wish that {1}?",
                    "What do you know about {1}?",
                    "Really, if {1}?",
                ]},
            ],
        },
        {
            "keyword": "family",
            "rank": 3,
            "decompositions": [
                {"pattern": "* my @family *", "reassemblies": [
                    "Tell me more about your family.",
                    "Who else in your family {1}?",
                    "Your family?",
                    "What else comes to mind when you think of your family?",
                ]},
                {"pattern": "*", "reassemblies": [
                    "Tell me more about your family.",
                    "How do you get along with your family?",
                ]},
            ],
        },
        {
            "keyword": "my",
            "rank": 2,
            "decompositions": [
                {"pattern": "* my *", "memory": True, "reassemblies": [
                    "Your {1}?",
                    "Why do you say your {1}?",
                    "Does that suggest anything else which belongs to you?",
                    "Is it important to you that your {1}?",
                ]},
            ],
        },
        {
            "keyword": "everyone",
            "rank": 2,
            "decompositions": [
                {"pattern": "*", "reassemblies": [
                    "Really, everyone?",
                    "Surely not everyone.",
                    "Can you think of anyone in particular?",
                    "Who, for example?",
                    "You are thinking of a very special person?",
                ]},
            ],
        },
        {
            "keyword": "was",
            "rank": 2,
            "decompositions": [
                {"pattern": "* was i *", "reassemblies": [
                    "What if you were {1}?",
                    "Do you think you were {1}?",
                    "Were you {1}?",
                    "What would it mean if you were {1}?",
                ]},
                {"pattern": "* i was *", "reassemblies": [
                    "Were you really?",
                    "Why do you tell me you were {1} now?",
                    "Perhaps I already know you were {1}.",
                ]},
                {"pattern": "* was you *", "reassemblies": [
                    "Would you like to believe I was {1}?",
                    "What suggests that I was {1}?",
                    "What do you think?",
                ]},
            ],
        },
        {
            "keyword": "always",
            "rank": 1,
            "decompositions": [
                {"pattern": "*", "reassemblies": [
                    "Can you think of a specific example?",
                    "When?",
                    "What incident are you thinking of?",
                    "Really, always?",
                ]},
            ],
        },
        {
            "keyword": "am",
            "rank": 0,
            "decompositions": [
                {"pattern": "* am i *", "reassemblies": [
                    "Do you believe you are {1}?",
                    "Would you want to be {1}?",
                    "You wish I would tell you you are {1}?",
                    "What would it mean if you were {1}?",
                    "=what",
                ]},
                {"pattern": "*", "reassemblies": [
                    "Why do you say 'am'?",
                    "I don't understand that.",
                ]},
            ],
        },
        {
            "keyword": "are",
            "rank": 0,
            "decompositions": [
                {"pattern": "* are you *", "reassemblies": [
                    "Why are you interested in whether I am {1} or not?",
                    "Would you prefer if I weren't {1}?",
                    "Perhaps I am {1} in your fantasies.",
                    "Do you sometimes think I am {1}?",
                    "=what",
                ]},
                {"pattern": "* are *", "reassemblies": [
                    "Did you think they might not be {1}?",
                    "Would you like it if they were not {1}?",
                    "What if they were not {1}?",
                    "Possibly they are {1}.",
                ]},
            ],
        },
        {
            "keyword": "your",
            "rank": 0,
            "decompositions": [
                {"pattern": "* your *", "reassemblies": [
                    "Why are you concerned over my {1}?",
                    "What about your own {1}?",
                    "Are you worried about someone else's {1}?",
                    "Really, my {1}?",
                ]},
            ],
        },
        {
            "keyword": "i",
            "rank": 0,
            "decompositions": [
                {"pattern": "* i @desire *", "reassemblies": [
                    "What would it mean to you if you got {1}?",
                    "Why do you want {1}?",
                    "Suppose you got {1} soon?",
                    "What if you never got {1}?",
                ]},
                {"pattern": "* i am @sad *", "reassemblies": [
                    "I am sorry to hear that you are feeling this way.",
                    "Do you think coming here will help you not to feel this way?",
                    "I'm sure it's not pleasant to feel like that.",
                    "Can you explain what made you feel this way?",
                ]},
                {"pattern": "* i am @happy *", "reassemblies": [
                    "How have I helped you to feel this way?",
                    "What makes you feel this way just now?",
                    "Can you explain why you are suddenly feeling better?",
                ]},
                {"pattern": "* i @belief *", "reassemblies": [
                    "Do you really think so?",
                    "Why do you believe {1}?",
                    "Do you doubt that {1}?",
                ]},
                {"pattern": "* i am *", "reassemblies": [
                    "Is it because you are {1} that you came to me?",
                    "How long have you been {1}?",
                    "Do you believe it is normal to be {1}?",
                    "Do you enjoy being {1}?",
                ]},
                {"pattern": "* i can not *", "reassemblies": [
                    "How do you know that you can't {1}?",
                    "Have you tried?",
                    "Perhaps you could {1} now.",
                    "Do you really want to be able to {1}?",
                ]},
                {"pattern": "* i do not *", "reassemblies": [
                    "Don't you really {1}?",
                    "Why don't you {1}?",
                    "Do you wish to be able to {1}?",
                    "Does that trouble you?",
                ]},
                {"pattern": "* i * you *", "reassemblies": [
                    "Perhaps in your fantasy we {1} each other.",
                    "Do you wish to {1} me?",
                    "You seem to need to {1} me.",
                    "Do you {1} anyone else?",
                ]},
                {"pattern": "*", "reassemblies": [
                    "You say {0}?",
                    "Can you elaborate on that?",
                    "Do you say {0} for some special reason?",
                    "That's quite interesting.",
                ]},
            ],
        },
        {
            "keyword": "you",
            "rank": 0,
            "decompositions": [
                {"pattern": "* you remind me of *", "reassemblies": ["=alike"]},
                {"pattern": "* you are *", "reassemblies": [
                    "What makes you think I am {1}?",
                    "Does it please you to believe I am {1}?",
                    "Do you sometimes wish you were {1}?",
                    "Perhaps you would like to be {1}.",
                ]},
                {"pattern": "* you * me *", "reassemblies": [
                    "Why do you think I {1} you?",
                    "You like to think I {1} you, don't you?",
                    "What makes you think I {1} you?",
                    "Really, I {1} you?",
                ]},
                {"pattern": "*", "reassemblies": [
                    "We were discussing you, not me.",
                    "Oh, I?",
                    "You're not really talking about me, are you?",
                    "What are your feelings now?",
                ]},
            ],
        },
        {
            "keyword": "can",
            "rank": 0,
            "decompositions": [
                {"pattern": "* can you *", "reassemblies": [
                    "You believe I can {1}, don't you?",
                    "=what",
                    "You want me to be able to {1}.",
                    "Perhaps you would like to be able to {1} yourself.",
                ]},
                {"pattern": "* can i *", "reassemblies": [
                    "Whether or not you can {1} depends on you more than on me.",
                    "Do you want to be able to {1}?",
                    "Perhaps you don't want to {1}.",
                    "=what",
                ]},
            ],
        },
        {
            "keyword": "why",
            "rank": 0,
            "decompositions": [
                {"pattern": "* why do not you *", "reassemblies": [
                    "Do you believe I don't {1}?",
                    "Perhaps I will {1} in good time.",
                    "Should you {1} yourself?",
                    "You want me to {1}?",
                    "=what",
                ]},
                {"pattern": "* why can not i *", "reassemblies": [
                    "Do you think you should be able to {1}?",
                    "Do you want to be able to {1}?",
                    "Do you believe this will help you to {1}?",
                    "Have you any idea why you can't {1}?",
                    "=what",
                ]},
                {"pattern": "*", "reassemblies": ["=what"]},
            ],
        },
        {
            "keyword": "what",
            "rank": 0,
            "decompositions": [
                {"pattern": "*", "reassemblies": [
                    "Why do you ask?",
                    "Does that question interest you?",
                    "What is it you really want to know?",
                    "Are such questions much on your mind?",
                    "What answer would please you most?",
                    "What do you think?",
                    "What comes to mind when you ask that?",
                    "Have you asked such questions before?",
                ]},
            ],
        },
        {
            "keyword": "because",
            "rank": 0,
            "decompositions": [
                {"pattern": "*", "reassemblies": [
                    "Is that the real reason?",
                    "Don't any other reasons come to mind?",
                    "Does that reason seem to explain anything else?",
                    "What other reasons might there be?",
                ]},
            ],
        },
        {
            "keyword": "perhaps",
            "rank": 0,
            "decompositions": [
                {"pattern": "*", "reassemblies": [
                    "You don't seem quite certain.",
                    "Why the uncertain tone?",
                    "Can't you be more positive?",
                    "You aren't sure?",
                ]},
            ],
        },
        {
            "keyword": "sorry",
            "rank": 0,
            "decompositions": [
                {"pattern": "*", "reassemblies": [
                    "Please don't apologize.",
                    "Apologies are not necessary.",
                    "What feelings do you have when you apologize?",
                ]},
            ],
        },
        {
            "keyword": "hello",
            "rank": 0,
            "decompositions": [
                {"pattern": "*", "reassemblies": [
                    "How do you do. Please state your problem.",
                    "Hi. What seems to be your problem?",
                ]},
            ],
        },
        {
            "keyword": "yes",
            "rank": 0,
            "decompositions": [
                {"pattern": "*", "reassemblies": [
                    "You seem quite positive.",
                    "You are sure?",
                    "I see.",
                    "I understand.",
                ]},
            ],
        },
        {
            "keyword": "no",
            "rank": 0,
            "decompositions": [
                {"pattern": "*", "reassemblies": [
                    "Are you saying no just to be negative?",
                    "You are being a bit negative.",
                    "Why not?",
                    "Why no?",
                ]},
            ],
        },
    ],
}
