from ...core import Config, Database

TABLE = Config.CLIENTS_TABLE

_SELECT_COLS = 'id, name, designation, description, image_url, created_at, updated_at'


def _row_to_dict(row):
    return {
        'id': row['id'],
        'name': row['name'],
        'designation': row['designation'],
        'description': row['description'],
        'image': row['image_url'],
        'createdAt': row['created_at'],
        'updatedAt': row['updated_at'],
    }


class ClientDatabase:
    @staticmethod
    def init_table():
        with Database.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f'''
                CREATE TABLE IF NOT EXISTS {TABLE} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    designation TEXT NOT NULL,
                    description TEXT NOT NULL,
                    image_url TEXT NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')
            cursor.execute(f'CREATE INDEX IF NOT EXISTS idx_clients_created ON {TABLE}(created_at)')

    @staticmethod
    def get_all():
        rows = Database.fetch_all(f'SELECT {_SELECT_COLS} FROM {TABLE} ORDER BY created_at DESC, id DESC')
        return [_row_to_dict(row) for row in rows]

    @staticmethod
    def get(client_id):
        row = Database.fetch_one(f'SELECT {_SELECT_COLS} FROM {TABLE} WHERE id = ?', (client_id,))
        return _row_to_dict(row) if row else None

    @staticmethod
    def create(name, designation, description, image_url):
        client_id, _ = Database.execute(f'''
            INSERT INTO {TABLE} (name, designation, description, image_url)
            VALUES (?, ?, ?, ?)
        ''', (name, designation, description, image_url))
        return ClientDatabase.get(client_id)

    @staticmethod
    def update(client_id, **fields):
        allowed = ('name', 'designation', 'description', 'image_url')
        updates = [(col, fields[col]) for col in allowed if col in fields]

        if updates:
            set_clause = ', '.join(f'{col} = ?' for col, _ in updates)
            params = [value for _, value in updates] + [client_id]
            _, rowcount = Database.execute(
                f'UPDATE {TABLE} SET {set_clause}, updated_at = CURRENT_TIMESTAMP WHERE id = ?',
                params
            )
            if rowcount == 0:
                return None
        return ClientDatabase.get(client_id)

    @staticmethod
    def delete(client_id):
        _, rowcount = Database.execute(f'DELETE FROM {TABLE} WHERE id = ?', (client_id,))
        return rowcount > 0
