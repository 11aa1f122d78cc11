# heat_domain/user_config.py

# ==============================================================================
# 用戶常用配置 (User Configuration)
# 您可以在此處快速調整模擬的關鍵參數
# ==============================================================================

# --- 網格解析度 ---
nx = 640
ny = 360

# --- 物理空間範圍 (x 與 y 共用同一個步長，ny 應與長寬比一致) ---
x_min = -2.0
x_max = 2.0
y_min = -1.125
y_max = 1.125

# --- 區域形狀與驅動 ---
# 可用的預設見 physics/domains.py 的 domain_configs
domain_config_name = 'julia_default'
# 只對 Julia 區域生效，見 physics/drivers.py
shape_driver_config_name = 'julia_circle'
initial_condition_config_name = 'gaussian_default'

# --- 熱方程參數 ---
# 顯式格式需要 dt / (dx^2 * viscosity) <= 1/4
dt = 4.0e-6
viscosity = 10.0
t_in = 2.0     # 邊界 (深度 0) 的溫度
t_out = 0.0    # 區域外的背景溫度
drift_speed = 0.0

# --- 動畫長度 ---
num_frames = 4500
substeps_per_frame = 50

# --- 場線 ---
draw_field_lines = True
num_field_lines = 200
field_line_factor = 100
field_line_step = 2.0e-5
field_line_max_steps = 100000

# --- 顏色 ---
# field_rep: 'intensity' 或 'gradient'；color_scheme: 'lum'、'hue' 或 'phase'
field_rep = 'intensity'
color_scheme = 'hue'
rescale_variance = False

# --- 影格擷取 ---
# 設為 True 時，每個影格都會存成 PNG，結束時再組裝成 GIF。
enable_capture = False
