from ...core import Config, Database

TABLE = Config.PROJECTS_TABLE

_SELECT_COLS = 'id, name, description, location, image_url, created_at, updated_at'


def _row_to_dict(row):
    """Convert a DB row to the project wire format"""
    return {
        'id': row['id'],
        'name': row['name'],
        'description': row['description'],
        'location': row['location'],
        'image': row['image_url'],
        'createdAt': row['created_at'],
        'updatedAt': row['updated_at'],
    }


class ProjectDatabase:
    @staticmethod
    def init_table():
        with Database.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f'''
                CREATE TABLE IF NOT EXISTS {TABLE} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    description TEXT NOT NULL,
                    location TEXT,
                    image_url TEXT NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')
            cursor.execute(f'CREATE INDEX IF NOT EXISTS idx_projects_created ON {TABLE}(created_at)')

    @staticmethod
    def get_all():
        rows = Database.fetch_all(f'SELECT {_SELECT_COLS} FROM {TABLE} ORDER BY created_at DESC, id DESC')
        return [_row_to_dict(row) for row in rows]

    @staticmethod
    def get(project_id):
        row = Database.fetch_one(f'SELECT {_SELECT_COLS} FROM {TABLE} WHERE id = ?', (project_id,))
        return _row_to_dict(row) if row else None

    @staticmethod
    def create(name, description, image_url, location=None):
        project_id, _ = Database.execute(f'''
            INSERT INTO {TABLE} (name, description, location, image_url)
            VALUES (?, ?, ?, ?)
        ''', (name, description, location, image_url))
        return ProjectDatabase.get(project_id)

    @staticmethod
    def update(project_id, **fields):
        """Update the given columns. Returns the updated project or None if missing."""
        allowed = ('name', 'description', 'location', 'image_url')
        updates = [(col, fields[col]) for col in allowed if col in fields]

        if updates:
            set_clause = ', '.join(f'{col} = ?' for col, _ in updates)
            params = [value for _, value in updates] + [project_id]
            _, rowcount = Database.execute(
                f'UPDATE {TABLE} SET {set_clause}, updated_at = CURRENT_TIMESTAMP WHERE id = ?',
                params
            )
            if rowcount == 0:
                return None
        return ProjectDatabase.get(project_id)

    @staticmethod
    def delete(project_id):
        _, rowcount = Database.execute(f'DELETE FROM {TABLE} WHERE id = ?', (project_id,))
        return rowcount > 0
