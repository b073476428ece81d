from git_commit_ai._engine.files.controller import (
    get_default_api_key_path,
    get_default_profile_path,
    get_home_dir,
    read_api_key,
    read_profile,
    read_text_file,
    require_file,
    save_results_to_file,
)
