from ...core import Config, Database

TABLE = Config.CONTACTS_TABLE


def _row_to_dict(row):
    return {
        'id': row['id'],
        'fullName': row['full_name'],
        'email': row['email'],
        'mobileNumber': row['mobile_number'],
        'city': row['city'],
        'submittedAt': row['submitted_at'],
    }


class ContactDatabase:
    @staticmethod
    def init_table():
        with Database.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f'''
                CREATE TABLE IF NOT EXISTS {TABLE} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    full_name TEXT NOT NULL,
                    email TEXT NOT NULL,
                    mobile_number TEXT NOT NULL,
                    city TEXT NOT NULL,
                    ip_address TEXT,
                    submitted_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')
            cursor.execute(f'CREATE INDEX IF NOT EXISTS idx_contacts_submitted ON {TABLE}(submitted_at)')

    @staticmethod
    def get_all():
        rows = Database.fetch_all(f'''
            SELECT id, full_name, email, mobile_number, city, submitted_at
            FROM {TABLE}
            ORDER BY submitted_at DESC, id DESC
        ''')
        return [_row_to_dict(row) for row in rows]

    @staticmethod
    def get(contact_id):
        row = Database.fetch_one(f'''
            SELECT id, full_name, email, mobile_number, city, submitted_at
            FROM {TABLE} WHERE id = ?
        ''', (contact_id,))
        return _row_to_dict(row) if row else None

    @staticmethod
    def create(full_name, email, mobile_number, city, ip_address=None):
        contact_id, _ = Database.execute(f'''
            INSERT INTO {TABLE} (full_name, email, mobile_number, city, ip_address)
            VALUES (?, ?, ?, ?, ?)
        ''', (full_name, email, mobile_number, city, ip_address))
        return ContactDatabase.get(contact_id)

    @staticmethod
    def delete(contact_id):
        _, rowcount = Database.execute(f'DELETE FROM {TABLE} WHERE id = ?', (contact_id,))
        return rowcount > 0
