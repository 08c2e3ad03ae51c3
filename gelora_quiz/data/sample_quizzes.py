"""초기 샘플 퀴즈 (시드 마이그레이션 및 테스트에서 사용)"""
import json

CATEGORIES = [
    {"id": 1, "name": "Cryptocurrency"},
    {"id": 2, "name": "Web3"},
    {"id": 3, "name": "NFTs"},
]

SAMPLE_QUIZZES = [
    {
        "id": "crypto-basics",
        "title": "Crypto Basics",
        "description": "Test your knowledge of cryptocurrency fundamentals",
        "category_id": 1,
        "difficulty": "easy",
        "time_limit": 300,
        "image_url": "https://res.cloudinary.com/demo/image/upload/v1640835445/crypto_basics.jpg",
        "questions": [
            {
                "id": "crypto-basics-q1",
                "text": 'What does "HODL" mean in crypto?',
                "options": [
                    "Hold On for Dear Life",
                    "High Output Digital Ledger",
                    "Hybrid Online Data Link",
                    "Hash Output Decentralized Logic",
                ],
                "correct_answer": 0,
                "explanation": 'HODL originated from a typo of "hold" and became a popular strategy.',
            },
            {
                "id": "crypto-basics-q2",
                "text": "What is the maximum supply of Bitcoin?",
                "options": ["21 million", "100 million", "1 billion", "Unlimited"],
                "correct_answer": 0,
                "explanation": "Bitcoin has a hard cap of 21 million coins.",
            },
            {
                "id": "crypto-basics-q3",
                "text": "What is a blockchain?",
                "options": [
                    "A type of cryptocurrency",
                    "A distributed ledger technology",
                    "A mining algorithm",
                    "A wallet application",
                ],
                "correct_answer": 1,
                "explanation": "Blockchain is a distributed ledger that records transactions across multiple computers.",
            },
            {
                "id": "crypto-basics-q4",
                "text": 'What does "DeFi" stand for?',
                "options": [
                    "Digital Finance",
                    "Decentralized Finance",
                    "Distributed Finance",
                    "Dynamic Finance",
                ],
                "correct_answer": 1,
                "explanation": "DeFi stands for Decentralized Finance.",
            },
            {
                "id": "crypto-basics-q5",
                "text": "What is a smart contract?",
                "options": [
                    "A legal document",
                    "A trading strategy",
                    "Self-executing code on blockchain",
                    "A type of cryptocurrency",
                ],
                "correct_answer": 2,
                "explanation": "Smart contracts are self-executing contracts with terms directly written into code.",
            },
        ],
    },
    {
        "id": "web3-advanced",
        "title": "Web3 & DApps",
        "description": "Advanced concepts in Web3 and decentralized applications",
        "category_id": 2,
        "difficulty": "hard",
        "time_limit": 600,
        "image_url": "https://res.cloudinary.com/demo/image/upload/v1640835445/web3_advanced.jpg",
        "questions": [
            {
                "id": "web3-advanced-q1",
                "text": "What is the difference between Layer 1 and Layer 2?",
                "options": [
                    "Layer 1 is faster",
                    "Layer 2 is built on top of Layer 1",
                    "They are the same thing",
                    "Layer 1 is for NFTs only",
                ],
                "correct_answer": 1,
                "explanation": "Layer 2 solutions are built on top of Layer 1 blockchains to improve scalability.",
            },
            {
                "id": "web3-advanced-q2",
                "text": "What is gas in Ethereum?",
                "options": ["A type of token", "Transaction fees", "Mining reward", "Staking mechanism"],
                "correct_answer": 1,
                "explanation": "Gas refers to the fee required to execute transactions on the Ethereum network.",
            },
            {
                "id": "web3-advanced-q3",
                "text": 'What does "TVL" measure in DeFi?',
                "options": [
                    "Total Value Locked",
                    "Transaction Volume Limit",
                    "Token Velocity Level",
                    "Technical Validation Logic",
                ],
                "correct_answer": 0,
                "explanation": "TVL measures the total value of assets locked in a DeFi protocol.",
            },
            {
                "id": "web3-advanced-q4",
                "text": "What is an oracle in blockchain?",
                "options": [
                    "A prediction market",
                    "Data feed from external sources",
                    "A type of consensus mechanism",
                    "A smart contract template",
                ],
                "correct_answer": 1,
                "explanation": "Oracles provide external data to blockchain networks and smart contracts.",
            },
        ],
    },
    {
        "id": "nft-knowledge",
        "title": "NFT Fundamentals",
        "description": "Understanding Non-Fungible Tokens and digital ownership",
        "category_id": 3,
        "difficulty": "medium",
        "time_limit": 240,
        "image_url": "https://res.cloudinary.com/demo/image/upload/v1640835445/nft_fundamentals.jpg",
        "questions": [
            {
                "id": "nft-knowledge-q1",
                "text": 'What makes an NFT "non-fungible"?',
                "options": [
                    "It cannot be copied",
                    "It is unique and cannot be replaced",
                    "It is expensive",
                    "It is stored on blockchain",
                ],
                "correct_answer": 1,
                "explanation": "Non-fungible means each token is unique and cannot be replaced by another identical token.",
            },
            {
                "id": "nft-knowledge-q2",
                "text": "What is the most common NFT standard on Ethereum?",
                "options": ["ERC-20", "ERC-721", "ERC-1155", "ERC-777"],
                "correct_answer": 1,
                "explanation": "ERC-721 is the most widely used standard for NFTs on Ethereum.",
            },
            {
                "id": "nft-knowledge-q3",
                "text": 'What is "minting" an NFT?',
                "options": [
                    "Buying an NFT",
                    "Creating a new NFT on the blockchain",
                    "Selling an NFT",
                    "Transferring an NFT",
                ],
                "correct_answer": 1,
                "explanation": "Minting is the process of creating a new NFT and recording it on the blockchain.",
            },
            {
                "id": "nft-knowledge-q4",
                "text": 'What is a "rug pull" in NFT projects?',
                "options": [
                    "A successful launch",
                    "When creators abandon the project after raising funds",
                    "A type of NFT artwork",
                    "A marketing strategy",
                ],
                "correct_answer": 1,
                "explanation": "A rug pull occurs when project creators disappear with investors' money.",
            },
        ],
    },
]


def quiz_rows() -> list[dict]:
    """quizzes 테이블 행 (questions 제외, total_questions 계산)"""
    rows = []
    for quiz in SAMPLE_QUIZZES:
        row = {key: value for key, value in quiz.items() if key != "questions"}
        row["total_questions"] = len(quiz["questions"])
        row["is_active"] = True
        rows.append(row)
    return rows


def question_rows() -> list[dict]:
    """questions 테이블 행 (options는 JSON 문자열)"""
    rows = []
    for quiz in SAMPLE_QUIZZES:
        for order_index, question in enumerate(quiz["questions"]):
            rows.append({
                "id": question["id"],
                "quiz_id": quiz["id"],
                "text": question["text"],
                "options": json.dumps(question["options"]),
                "correct_answer": question["correct_answer"],
                "explanation": question["explanation"],
                "order_index": order_index,
            })
    return rows
