"""Apply a SQL migration file (migrations/*.sql) to the PostgreSQL database."""
import os
import sys
import psycopg2
from dotenv import load_dotenv


def apply_migration(migration_file):
    load_dotenv()

    try:
        database_url = os.getenv('DATABASE_URL')
        if database_url:
            conn = psycopg2.connect(database_url)
        else:
            conn = psycopg2.connect(
                host=os.getenv('DB_HOST', 'localhost'),
                port=os.getenv('DB_PORT', '5432'),
                dbname=os.getenv('DB_NAME', 'hgm'),
                user=os.getenv('DB_USER', 'hgmuser'),
                password=os.getenv('DB_PASSWORD') or os.getenv('DB_PASS', 'hgmpw')
            )
        conn.autocommit = True
        cur = conn.cursor()

        print(f"Applying migration: {migration_file}")

        with open(migration_file, 'r', encoding='utf-8') as f:
            sql = f.read()

        cur.execute(sql)
        print("Migration applied successfully!")

        cur.close()
        conn.close()
    except (psycopg2.Error, OSError) as e:
        print(f"Error applying migration: {e}")
        sys.exit(1)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/apply_migration.py <path_to_sql_file>")
        sys.exit(1)

    apply_migration(sys.argv[1])
