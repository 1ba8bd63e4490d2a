"""
Static look-up tables shared by every probe.

Loaded once at import and never mutated: frozensets, tuples and
pre-compiled regexes only, so concurrent probes can read them freely.
"""
import re


# =============================================================================
# URL / DOMAIN
# =============================================================================

# Higher risk TLDs
SUSPICIOUS_TLDS = frozenset({
    '.xyz', '.top', '.club', '.work', '.click', '.loan', '.win',
    '.gq', '.ml', '.cf', '.ga', '.tk', '.buzz', '.icu', '.monster',
    '.quest', '.rest', '.surf', '.cam', '.bar', '.hair',
})

# Lower risk TLDs
TRUSTED_TLDS = frozenset({
    '.com', '.org', '.net', '.edu', '.gov', '.mil', '.int',
    '.co.uk', '.co', '.io', '.dev', '.app', '.ai', '.us',
})

# Second-level labels that form a public suffix with the TLD (co.uk, com.au, ...)
SECOND_LEVEL_LABELS = frozenset({'co', 'com', 'net', 'org', 'gov', 'edu', 'ac'})

PHISHING_PATTERNS = tuple(re.compile(p, re.IGNORECASE) for p in (
    r'paypal.*\.(?!com)',
    r'amazon.*\.(?!com)',
    r'apple.*\.(?!com)',
    r'google.*\.(?!com)',
    r'microsoft.*\.(?!com)',
    r'facebook.*\.(?!com)',
    r'login.*secure.*\.',
    r'account.*verify.*\.',
    r'update.*billing.*\.',
    r'free.*crypto.*\.',
    r'claim.*reward.*\.',
))

# Nameserver fragments of managed DNS providers / big registrars.
# A domain parked on one of them is usually not a fresh throwaway.
MANAGED_DNS_PROVIDERS = ('cloudflare', 'awsdns', 'google', 'domaincontrol', 'registrar')

# Domain age assumed by the nameserver heuristic
MANAGED_DNS_AGE_DAYS = 365
UNMANAGED_DNS_AGE_DAYS = 30


# =============================================================================
# DARK WEB
# =============================================================================

ONION_MIRRORS = frozenset({
    'facebook.com', 'nytimes.com', 'bbc.com', 'bbc.co.uk', 'duckduckgo.com',
    'protonmail.com', 'proton.me', 'riseup.net', 'debian.org',
    'torproject.org', 'archive.org', 'keybase.io', 'securedrop.org',
    'wikileaks.org', 'propublica.org', 'twitter.com', 'x.com',
})

SCAM_MARKETS = (
    'silkroad', 'empire-market', 'alphabay', 'hydra-market', 'darkfox',
    'versus-market', 'torrez', 'cannazon', 'world-market', 'incognito-market',
    'bohemia-market', 'kingdom-market', 'cypher-market', 'abacus-market',
)

BREACH_SERVICES = frozenset({
    'haveibeenpwned.com', 'dehashed.com', 'leakcheck.io', 'snusbase.com',
    'breachdirectory.com', 'intelx.io', 'spycloud.com',
})

DARKWEB_SUSPICIOUS_TLDS = ('.tk', '.ml', '.ga', '.cf', '.gq', '.buzz', '.xyz', '.top', '.pw', '.cc', '.ws')

DARKWEB_PHISHING_PATTERNS = (
    'login', 'signin', 'security-alert', 'verify-account', 'update-info',
    'binance-', 'coinbase-', 'metamask-', 'paypal-',
)


# =============================================================================
# RUG PULL
# =============================================================================

KNOWN_SAFE_CONTRACTS = frozenset({
    '0xdac17f958d2ee523a2206206994597c13d831ec7',  # USDT
    '0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48',  # USDC
    '0x6b175474e89094c44da98b954eedeac495271d0f',  # DAI
    '0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2',  # WETH
    '0x2260fac5e5542a773aa44fbcfedf7c193bc2c599',  # WBTC
    '0x514910771af9ca656af840dff83e8264ecf986ca',  # LINK
    '0x1f9840a85d5af5bf1d1762f925bdaddc4201f984',  # UNI
    '0x7fc66500c84a76ad7e9c93437bfc5ac33e2ddae9',  # AAVE
    '0x95ad61b0a150d79219dcf64e1e6cc01f0b64c4ce',  # SHIB
})

SCAM_TOKEN_PATTERNS = tuple(re.compile(p, re.IGNORECASE) for p in (
    r'elon', r'musk', r'trump', r'pepe.*2', r'doge.*inu',
    r'safe.*moon', r'baby.*doge', r'floki', r'100x', r'1000x',
    r'moon.*shot', r'gem.*find',
))

CHAIN_IDS = {
    'ethereum': 1,
    'bsc': 56,
    'polygon': 137,
    'arbitrum': 42161,
    'base': 8453,
    'avalanche': 43114,
}
DEFAULT_CHAIN_ID = 1


# =============================================================================
# DROPSHIP
# =============================================================================

SHOPIFY_INDICATORS = ('cdn.shopify.com', 'myshopify.com', 'shopify-checkout', 'shopify.shop', '/cart.js')

# category -> (AliExpress low, AliExpress high) in USD
SOURCE_PRICE_RANGES = {
    'watches': (1, 15),
    'jewelry': (0.5, 10),
    'sunglasses': (1, 8),
    'clothing': (3, 20),
    'electronics': (5, 50),
    'phone cases': (0.5, 5),
    'bags': (3, 25),
    'shoes': (5, 30),
    'beauty': (1, 10),
    'fitness': (2, 20),
    'home': (2, 30),
    'toys': (1, 15),
    'pet': (1, 12),
}

# Checked in order, first match wins
CATEGORY_KEYWORDS = (
    ('watches', ('watch', 'timepiece', 'wristwatch', 'chronograph')),
    ('jewelry', ('necklace', 'bracelet', 'ring', 'earring', 'pendant', 'chain', 'jewelry')),
    ('sunglasses', ('sunglasses', 'shades', 'eyewear', 'glasses')),
    ('clothing', ('shirt', 'dress', 'hoodie', 'jacket', 'pants', 'leggings', 'sweater', 'tee')),
    ('electronics', ('charger', 'cable', 'speaker', 'headphones', 'earbuds', 'led', 'lamp', 'gadget')),
    ('phone cases', ('phone case', 'iphone case', 'samsung case', 'cover')),
    ('bags', ('bag', 'backpack', 'purse', 'wallet', 'clutch', 'tote')),
    ('shoes', ('sneaker', 'shoe', 'boot', 'sandal', 'slipper')),
    ('beauty', ('serum', 'cream', 'brush', 'makeup', 'skincare', 'mascara', 'foundation')),
    ('fitness', ('resistance band', 'yoga', 'gym', 'dumbbell', 'exercise', 'fitness')),
    ('home', ('pillow', 'blanket', 'organizer', 'storage', 'kitchen', 'decor')),
    ('toys', ('toy', 'puzzle', 'fidget', 'game', 'plush')),
    ('pet', ('pet', 'dog', 'cat', 'leash', 'collar', 'bowl')),
)

# (pattern, points, flag)
DROPSHIP_TITLE_PATTERNS = tuple((re.compile(p, re.IGNORECASE), points, flag) for p, points, flag in (
    (r'\b(2024|2025|2026|new|hot|best)\b', 5, 'Generic trend keywords in title'),
    (r'\b(luxury|premium|high quality)\b', 5, 'Aspirational keywords (common in dropship)'),
    (r'\b(free shipping|fast shipping)\b', 5, 'Shipping emphasis (typical dropship)'),
    (r'\b(unisex|men women|for men|for women)\b', 3, 'Broad targeting language'),
    (r'\b(minimalist|fashion|casual|elegant)\b', 3, 'Generic style descriptors'),
))
DROPSHIP_TITLE_POINTS_MAX = sum(points for _, points, _ in DROPSHIP_TITLE_PATTERNS)


# =============================================================================
# AD TRANSPARENCY
# =============================================================================

FUNNEL_PATTERNS = tuple((re.compile(p, re.IGNORECASE), flag) for p, flag in (
    (r'free (course|masterclass|webinar|training|ebook|guide|workshop)', 'Free lead magnet (course/webinar/ebook)'),
    (r'limited (spots|seats|time|offer|availability)', 'Scarcity/urgency tactics'),
    (r'link in bio|linktree|linktr\.ee|beacons\.ai|stan\.store', 'Multi-link aggregator (sales funnel)'),
    (r'dm (me|for|to) (get|learn|start)', 'DM-based sales funnel'),
    (r'passive income|financial freedom|quit.*(job|9.to.5)|work from (home|anywhere)', 'Income/lifestyle claims'),
    (r'make \$|earn \$|\$\d+k|\d+k/month|6.figure|7.figure', 'Specific income claims'),
    (r'coaching|mentoring|mentor|1.on.1|one.on.one', 'Coaching/mentoring offer'),
    (r'join (my|our|the) (community|academy|program|course|group)', 'Community/program sales'),
    (r'enroll|sign up|register|apply now|book a call', 'CTA for enrollment'),
    (r'testimonial|result|transformation|success stor', 'Social proof language'),
    (r'crypto|forex|trading|invest|nft', 'Financial product promotion'),
    (r'dropship|ecom|e-commerce|amazon fba|shopify', 'Ecommerce course promotion'),
    (r'smma|agency|client|freelanc', 'Agency/freelance course pitch'),
    (r'secret|hack|blueprint|formula|system|method', 'Magic formula language'),
    (r'🚀.*\$|💰.*link|💸.*dm|🔥.*(course|free)', 'Emoji + sales combo'),
))

GURU_CATEGORIES = (
    'business', 'entrepreneur', 'trading', 'crypto', 'forex',
    'real estate', 'coaching', 'motivation', 'self-improvement',
    'marketing', 'ecommerce', 'dropshipping', 'affiliate',
)

# Platforms whose public ad libraries cover most paid promotion
META_PLATFORMS = frozenset({'instagram', 'facebook'})


# =============================================================================
# EMAIL
# =============================================================================

DISPOSABLE_DOMAINS = frozenset({
    '10minutemail.com', '10minutemail.net', 'tempmail.com', 'temp-mail.org',
    'guerrillamail.com', 'guerrillamail.net', 'guerrillamail.org', 'guerrillamail.de',
    'guerrillamailblock.com', 'guerrillamail.info', 'grr.la', 'sharklasers.com',
    'mailinator.com', 'mailinator.net', 'mailinator2.com', 'mailinater.com', 'notmailinator.com',
    'maildrop.cc', 'dispostable.com', 'yopmail.com', 'yopmail.fr', 'yopmail.net',
    'throwaway.email', 'throwaway.com', 'trashmail.com', 'trashmail.net', 'trashmail.org',
    'trashmail.me', 'trashmail.io', 'trash-mail.at', 'trashymail.com', 'trashymail.net',
    'mytrashmail.com', 'trash2009.com', 'tempinbox.com', 'tempr.email', 'tempail.com',
    'fakeinbox.com', 'fakemail.net', 'fakemailgenerator.com', 'emailfake.com',
    'mohmal.com', 'getnada.com', 'nada.email', 'emailondeck.com', 'mintemail.com',
    'harakirimail.com', 'mailnesia.com', 'mailcatch.com', 'mailsac.com', 'mailnull.com',
    'discard.email', 'discardmail.com', 'discardmail.de', 'spamgourmet.com',
    'mytemp.email', 'tempmailo.com', 'burnermail.io', 'inboxkitten.com', 'mailpoof.com',
    'jetable.org', 'crazymailing.com', 'armyspy.com', 'dayrep.com', 'einrot.com',
    'fleckens.hu', 'gustr.com', 'jourrapide.com', 'rhyta.com', 'superrito.com',
    'teleworm.us', 'tempomail.fr', 'tittbit.in', 'bugmenot.com', 'mailexpire.com',
    'safetymail.info', 'filzmail.com', 'binkmail.com', 'bobmail.info', 'chammy.info',
    'devnullmail.com', 'letthemeatspam.com', 'reallymymail.com', 'reconmail.com',
    'spamfree24.org', 'tradermail.info', 'veryreallyme.com', 'tempsky.com',
    'mailtemp.info', 'tempmail.ninja', 'tempmailaddress.com', 'tmpmail.net', 'tmpmail.org',
    'emailtemporanea.com', 'emailtemporanea.net', 'mailforspam.com', 'instant-mail.de',
    'wegwerfmail.de', 'wegwerfmail.net', 'wegwerfmail.org', 'sogetthis.com', 'meltmail.com',
    'spaml.de', 'uggsrock.com', 'spamhereplease.com', 'spamherelots.com',
    'thisisnotmyrealemail.com', 'mailzilla.com', 'nomail.xl.cx', 'rcpt.at',
    'tempemails.io', 'tmpbox.com', 'dumpmail.de', 'thankyou2010.com', 'putthisinyouremail.com',
    'mailhz.me', 'dropmail.me', 'tempmail.plus', 'internxt.com', 'smailpro.com',
    'luxusmail.org', 'tmail.ws', 'disposablemail.com',
})

FREE_EMAIL_PROVIDERS = frozenset({
    'gmail.com', 'yahoo.com', 'hotmail.com', 'outlook.com', 'aol.com',
    'icloud.com', 'mail.com', 'protonmail.com', 'proton.me', 'zoho.com',
    'gmx.com', 'gmx.net', 'yandex.com', 'yandex.ru', 'tutanota.com',
    'tuta.io', 'fastmail.com', 'hushmail.com', 'live.com', 'msn.com',
    'me.com', 'mac.com', 'inbox.com', 'mail.ru', 'rambler.ru',
    'qq.com', '163.com', '126.com', 'sina.com', 'yeah.net',
})

# Shared / functional mailboxes rather than a person
ROLE_PREFIXES = frozenset({
    'admin', 'administrator', 'webmaster', 'postmaster', 'hostmaster',
    'info', 'support', 'help', 'sales', 'marketing', 'contact',
    'billing', 'abuse', 'noc', 'security', 'no-reply', 'noreply',
    'no_reply', 'donotreply', 'do-not-reply', 'mailer-daemon',
    'office', 'hr', 'jobs', 'careers', 'press', 'media',
    'team', 'hello', 'feedback', 'newsletter', 'subscribe',
})

# misspelt domain -> intended domain
DOMAIN_TYPOS = {
    'gmial.com': 'gmail.com', 'gmal.com': 'gmail.com', 'gmaill.com': 'gmail.com',
    'gamil.com': 'gmail.com', 'gnail.com': 'gmail.com', 'gmail.co': 'gmail.com',
    'gmail.con': 'gmail.com', 'gmai.com': 'gmail.com', 'gmil.com': 'gmail.com',
    'yahooo.com': 'yahoo.com', 'yaho.com': 'yahoo.com', 'yaoo.com': 'yahoo.com',
    'yahoo.co': 'yahoo.com', 'yahoo.con': 'yahoo.com',
    'hotmal.com': 'hotmail.com', 'hotmial.com': 'hotmail.com',
    'hotmil.com': 'hotmail.com', 'hotmail.co': 'hotmail.com',
    'outlok.com': 'outlook.com', 'outloo.com': 'outlook.com', 'outlook.co': 'outlook.com',
    'icloud.co': 'icloud.com', 'iclod.com': 'icloud.com',
    'protonmal.com': 'protonmail.com', 'protonmail.co': 'protonmail.com',
}

KEYBOARD_PATTERNS = ('qwerty', 'asdfgh', 'zxcvbn', 'qazwsx', '12345', 'abcdef')

# Six or more consonants in a row: typical of generated local parts
CONSONANT_RUN = re.compile(r'[bcdfghjklmnpqrstvwxyz]{6,}', re.IGNORECASE)


# =============================================================================
# SOCIAL PLATFORMS / TRADING
# =============================================================================

# platform -> host suffixes, checked in order
PLATFORM_HOSTS = (
    ('instagram', ('instagram.com', 'instagr.am')),
    ('tiktok', ('tiktok.com',)),
    ('twitter', ('twitter.com', 'x.com')),
    ('youtube', ('youtube.com', 'youtu.be')),
    ('facebook', ('facebook.com', 'fb.com')),
    ('linkedin', ('linkedin.com',)),
    ('twitch', ('twitch.tv',)),
)

# Platforms the engagement audit has audience heuristics for
AUDITED_PLATFORMS = frozenset({'instagram', 'tiktok', 'twitter', 'youtube', 'facebook'})

REGULATED_EXCHANGES = (
    'binance.com', 'coinbase.com', 'kraken.com', 'gemini.com',
    'crypto.com', 'robinhood.com', 'etoro.com', 'interactivebrokers.com',
    'fidelity.com', 'schwab.com', 'tdameritrade.com',
)
