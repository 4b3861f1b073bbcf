from tablenorm.config_model.model import load_config
cfg = load_config()  # reads $TABLENORM_CFG or config/config.toml
print("Table type:", cfg.table.type_table)
print("Row type:", cfg.table.type_row)
print("Cell type:", cfg.table.type_cell)
print("Rows-only rule:", cfg.table.rows_only)
print("Max passes:", cfg.normalize.max_passes)
