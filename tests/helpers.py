# seeded lookup ids (insertion order of freshconnect.data.seed)
LALGUDI = 1
MANACHANALLUR = 2
VEGETABLES = 1
FRUITS = 2
PERISHABLE = 1
LONG_SHELF_LIFE = 3


def auth(user_id):
    return {"X-User-Id": str(user_id)}
