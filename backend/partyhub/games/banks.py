"""Static content used by the rule modules: question pools and word lists."""

CATEGORIES = ('food', 'travel', 'lifestyle', 'deep', 'fun')

WOULD_YOU_RATHER_QUESTIONS = {
    'food': [
        ('Never eat pizza again', 'Never eat burgers again'),
        ('Only eat sweet food', 'Only eat savory food'),
        ('Give up chocolate forever', 'Give up cheese forever'),
        ('Eat only breakfast foods', 'Eat only dinner foods'),
        ('Never eat dessert again', 'Never eat appetizers again'),
        ('Only drink water', 'Only drink juice'),
        ('Eat sushi every day', 'Eat tacos every day'),
        ('Have unlimited free coffee', 'Have unlimited free ice cream'),
        ('Cook all your meals', 'Never cook again (but eat out)'),
        ('Only eat cold food', 'Only eat hot food'),
        ('Give up pasta', 'Give up bread'),
        ('Never eat fruits', 'Never eat vegetables'),
    ],
    'travel': [
        ('Travel to the past', 'Travel to the future'),
        ('Visit every country once', 'Visit your favorite country unlimited times'),
        ('Beach vacation', 'Mountain vacation'),
        ('Travel alone', 'Travel with a group'),
        ('Luxury hotel', 'Authentic local experience'),
        ('Road trip across your country', 'Flight to another continent'),
        ('Explore cities', 'Explore nature'),
        ('Free flights for life', 'Free hotels for life'),
        ('Visit space', 'Explore the deep ocean'),
        ('Safari in Africa', 'Northern lights in Iceland'),
        ('Never leave your country', 'Never return to your country'),
        ('Stay in one amazing place for a month', 'Visit 10 different places for 3 days each'),
    ],
    'lifestyle': [
        ('Live in a big city', 'Live in a small town'),
        ('Be a morning person', 'Be a night owl'),
        ('Work from home', 'Work in an office'),
        ('Have a dog', 'Have a cat'),
        ('Live without internet', 'Live without air conditioning'),
        ('Never use social media', 'Never watch TV/movies'),
        ('Have more time', 'Have more money'),
        ('Always be 10 minutes late', 'Always be 20 minutes early'),
        ('Be able to speak every language', 'Be able to play every instrument'),
        ('Have a rewind button for life', 'Have a pause button for life'),
        ('Be famous', 'Be the best friend of someone famous'),
        ('Have a photographic memory', 'Never forget a face'),
    ],
    'deep': [
        ('Know how you will die', 'Know when you will die'),
        ('Be loved', 'Be feared'),
        ('Be rich with no friends', 'Be poor with great friends'),
        ('Lose all your memories', 'Never make new memories'),
        ('Be able to change the past', 'Be able to see the future'),
        ('Save one person you love', 'Save 100 strangers'),
        ('Be remembered for one great thing', 'Be forgotten but live happily'),
        ('Relive your best day forever', 'Experience a new amazing day once'),
        ('Be intelligent but unhappy', 'Be less intelligent but happy'),
        ('Know the absolute truth', 'Live in blissful ignorance'),
        ('Live a safe boring life', 'Live a short exciting life'),
        ('Be able to undo one mistake', 'Be able to prevent one future mistake'),
    ],
    'fun': [
        ('Have the ability to fly', 'Have the ability to be invisible'),
        ('Fight one horse-sized duck', 'Fight 100 duck-sized horses'),
        ('Have a third eye', 'Have a third arm'),
        ('Speak to animals', 'Speak all human languages'),
        ('Have a dinosaur as a pet', 'Have a dragon as a pet'),
        ('Sneeze glitter', 'Cry confetti'),
        ('Live in a video game', 'Live in a movie'),
        ('Control fire', 'Control water'),
        ('Have a time machine', 'Have a teleporter'),
        ('Have X-ray vision', 'Have super hearing'),
        ('Be able to shrink', 'Be able to grow giant'),
        ('Live in a castle', 'Live on a private island'),
    ],
}

# (emoji, text) pairs
THIS_OR_THAT_QUESTIONS = {
    'food': [
        (('☕', 'Coffee'), ('🍵', 'Tea')),
        (('🍕', 'Pizza'), ('🍔', 'Burger')),
        (('🍦', 'Ice Cream'), ('🍰', 'Cake')),
        (('🍫', 'Chocolate'), ('🍬', 'Candy')),
        (('🌮', 'Tacos'), ('🍜', 'Ramen')),
        (('🍎', 'Apple'), ('🍌', 'Banana')),
        (('🥐', 'Croissant'), ('🥯', 'Bagel')),
        (('🍗', 'Chicken'), ('🥩', 'Steak')),
        (('🍣', 'Sushi'), ('🍱', 'Bento')),
        (('🍪', 'Cookies'), ('🧁', 'Cupcakes')),
        (('🥗', 'Salad'), ('🥙', 'Wrap')),
        (('🍩', 'Donuts'), ('🥞', 'Pancakes')),
        (('🌭', 'Hot Dog'), ('🥪', 'Sandwich')),
        (('🧀', 'Cheese'), ('🥓', 'Bacon')),
        (('🍟', 'Fries'), ('🍿', 'Popcorn')),
        (('🍓', 'Strawberry'), ('🍇', 'Grapes')),
    ],
    'travel': [
        (('🏖️', 'Beach'), ('🏔️', 'Mountains')),
        (('✈️', 'Plane'), ('🚗', 'Car')),
        (('🗼', 'Paris'), ('🗽', 'New York')),
        (('🚢', 'Cruise'), ('🚂', 'Train')),
        (('🎢', 'Theme Park'), ('🏊', 'Water Park')),
        (('🏝️', 'Island'), ('🏜️', 'Desert')),
        (('🏟️', 'Stadium'), ('🎭', 'Theater')),
        (('🚁', 'Helicopter'), ('🛥️', 'Yacht')),
        (('🏨', 'Resort'), ('🛖', 'Cabin')),
        (('🌃', 'Nightlife'), ('🥾', 'Hiking')),
    ],
    'lifestyle': [
        (('🐶', 'Dog'), ('🐱', 'Cat')),
        (('📱', 'Phone'), ('💻', 'Laptop')),
        (('📚', 'Reading'), ('🎵', 'Music')),
        (('🏃', 'Running'), ('🧘', 'Yoga')),
        (('🌺', 'Spring'), ('🍂', 'Fall')),
        (('🎬', 'Movies'), ('📖', 'Books')),
        (('🏋️', 'Gym'), ('🚴', 'Cycling')),
        (('🛍️', 'Shopping'), ('🎪', 'Events')),
        (('🥳', 'Party'), ('🛋️', 'Relax')),
        (('🍳', 'Cooking'), ('🍽️', 'Eating Out')),
    ],
    'deep': [
        (('❤️', 'Love'), ('💰', 'Money')),
        (('⏳', 'Time'), ('💎', 'Wealth')),
        (('👪', 'Family'), ('💼', 'Career')),
        (('🧭', 'Adventure'), ('🏠', 'Stability')),
        (('🔥', 'Passion'), ('⚖️', 'Balance')),
        (('🤝', 'Trust'), ('🔒', 'Privacy')),
        (('🌈', 'Hope'), ('🔍', 'Truth')),
        (('🪄', 'Magic'), ('🔬', 'Science')),
        (('🏆', 'Success'), ('💝', 'Kindness')),
        (('🎨', 'Creativity'), ('🧠', 'Logic')),
    ],
    'fun': [
        (('🦄', 'Unicorn'), ('🐉', 'Dragon')),
        (('🎃', 'Halloween'), ('🎄', 'Christmas')),
        (('🔥', 'Fire'), ('💧', 'Water')),
        (('👻', 'Ghost'), ('👽', 'Alien')),
        (('🎪', 'Circus'), ('🎡', 'Fair')),
        (('🎸', 'Rock'), ('🎤', 'Pop')),
        (('🦁', 'Lion'), ('🐯', 'Tiger')),
        (('🎮', 'Video Games'), ('🎲', 'Board Games')),
        (('💥', 'Action'), ('💕', 'Romance')),
        (('🏴‍☠️', 'Pirate'), ('🤠', 'Cowboy')),
    ],
}

HANGMAN_WORDS = {
    'movies': {
        'easy': ['STAR WARS', 'FROZEN', 'AVATAR', 'JAWS', 'ALIEN'],
        'medium': ['INCEPTION', 'GLADIATOR', 'CASABLANCA', 'JURASSIC PARK'],
        'hard': ['PULP FICTION', 'INTERSTELLAR', 'GOODFELLAS', 'BLADE RUNNER'],
    },
    'animals': {
        'easy': ['CAT', 'DOG', 'LION', 'BEAR', 'TIGER'],
        'medium': ['ELEPHANT', 'GIRAFFE', 'DOLPHIN', 'PENGUIN'],
        'hard': ['RHINOCEROS', 'CHIMPANZEE', 'CROCODILE', 'HIPPOPOTAMUS'],
    },
    'countries': {
        'easy': ['ITALY', 'CHINA', 'SPAIN', 'JAPAN', 'INDIA'],
        'medium': ['GERMANY', 'BRAZIL', 'AUSTRALIA', 'ARGENTINA'],
        'hard': ['SWITZERLAND', 'NETHERLANDS', 'PHILIPPINES', 'UZBEKISTAN'],
    },
    'food': {
        'easy': ['PIZZA', 'PASTA', 'RICE', 'BREAD', 'TACO'],
        'medium': ['BURRITO', 'LASAGNA', 'SUSHI', 'BURGER'],
        'hard': ['QUESADILLA', 'CAPPUCCINO', 'CROISSANT', 'TIRAMISU'],
    },
    'sports': {
        'easy': ['GOLF', 'SOCCER', 'TENNIS', 'RUGBY', 'BOXING'],
        'medium': ['BASEBALL', 'SWIMMING', 'CRICKET', 'HOCKEY'],
        'hard': ['BASKETBALL', 'BADMINTON', 'VOLLEYBALL', 'GYMNASTICS'],
    },
    'technology': {
        'easy': ['PHONE', 'MOUSE', 'WIFI', 'EMAIL', 'CLOUD'],
        'medium': ['COMPUTER', 'KEYBOARD', 'DATABASE', 'SOFTWARE'],
        'hard': ['BLOCKCHAIN', 'ALGORITHM', 'ENCRYPTION', 'CYBERSECURITY'],
    },
}
