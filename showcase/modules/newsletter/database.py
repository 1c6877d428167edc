from ...core import Config, Database

TABLE = Config.SUBSCRIPTIONS_TABLE

_SELECT_COLS = 'id, email, subscribed_at, is_active'


def _row_to_dict(row):
    return {
        'id': row['id'],
        'email': row['email'],
        'subscribedAt': row['subscribed_at'],
        'isActive': bool(row['is_active']),
    }


class SubscriptionDatabase:
    @staticmethod
    def init_table():
        with Database.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f'''
                CREATE TABLE IF NOT EXISTS {TABLE} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    email TEXT UNIQUE NOT NULL,
                    subscribed_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    is_active BOOLEAN DEFAULT 1,
                    ip_address TEXT,
                    user_agent TEXT
                )
            ''')
            cursor.execute(f'CREATE INDEX IF NOT EXISTS idx_subscriptions_active ON {TABLE}(is_active, subscribed_at)')

    @staticmethod
    def get_all():
        rows = Database.fetch_all(f'SELECT {_SELECT_COLS} FROM {TABLE} ORDER BY subscribed_at DESC, id DESC')
        return [_row_to_dict(row) for row in rows]

    @staticmethod
    def get(subscription_id):
        row = Database.fetch_one(f'SELECT {_SELECT_COLS} FROM {TABLE} WHERE id = ?', (subscription_id,))
        return _row_to_dict(row) if row else None

    @staticmethod
    def get_by_email(email):
        row = Database.fetch_one(f'SELECT {_SELECT_COLS} FROM {TABLE} WHERE email = ?', (email,))
        return _row_to_dict(row) if row else None

    @staticmethod
    def create(email, ip_address=None, user_agent=None):
        subscription_id, _ = Database.execute(f'''
            INSERT INTO {TABLE} (email, ip_address, user_agent)
            VALUES (?, ?, ?)
        ''', (email, ip_address, user_agent))
        return SubscriptionDatabase.get(subscription_id)

    @staticmethod
    def reactivate(subscription_id):
        Database.execute(f'''
            UPDATE {TABLE}
            SET is_active = 1, subscribed_at = CURRENT_TIMESTAMP
            WHERE id = ?
        ''', (subscription_id,))
        return SubscriptionDatabase.get(subscription_id)

    @staticmethod
    def delete(subscription_id):
        _, rowcount = Database.execute(f'DELETE FROM {TABLE} WHERE id = ?', (subscription_id,))
        return rowcount > 0
