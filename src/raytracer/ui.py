import gradio as gr
import PIL.Image

from raytracer import constants
from raytracer.core import Renderer, default_scene

# Keep the previous frame visible while the next one renders
CSS = """
.gradio-container { background-color: #0b0f19 !important; color: #e5e7eb !important; }
#output_img { background-color: #0b0f19 !important; border-radius: 8px; overflow: hidden; border: none !important; }
#output_img img { object-fit: contain; image-rendering: pixelated; }

.generating, .pending {
    opacity: 1 !important;
    filter: none !important;
    transition: none !important;
}

.loading, .progress-view, .loader, .spinner {
    display: none !important;
    visibility: hidden !important;
}
"""

DEFAULT_INPUTS = [*constants.DEFAULT_LIGHT, *constants.DEFAULT_EYE, True, 128]


def render_frame(light_x, light_y, light_z, eye_x, eye_y, eye_z, use_mirrors, resolution):
    scene = default_scene(light=(light_x, light_y, light_z),
                          eye=(eye_x, eye_y, eye_z),
                          mirrors=use_mirrors)
    resolution = int(resolution)
    image_data = Renderer(scene).render(width=resolution, height=resolution)
    return PIL.Image.fromarray(image_data)


def create_ui():

    with gr.Blocks(title="Raytracer") as demo:

        gr.Markdown("# Raytracer: Mirror Spheres on a Checkerboard")
        gr.Markdown("Single point light, hard shadows, up to three mirror passes.")

        with gr.Row():
            with gr.Column(scale=1):
                with gr.Group():
                    gr.Markdown("### 💡 Light Source")
                    light_x = gr.Slider(minimum=-600, maximum=600, value=constants.DEFAULT_LIGHT[0], label="Light X")
                    light_y = gr.Slider(minimum=-600, maximum=600, value=constants.DEFAULT_LIGHT[1], label="Light Y")
                    light_z = gr.Slider(minimum=1, maximum=800, value=constants.DEFAULT_LIGHT[2], label="Light Z (height)")

                with gr.Group():
                    gr.Markdown("### 🎥 Eye")
                    eye_x = gr.Slider(minimum=1, maximum=600, value=constants.DEFAULT_EYE[0], label="Eye X", info="Distance in front of the screen")
                    eye_y = gr.Slider(minimum=-300, maximum=300, value=constants.DEFAULT_EYE[1], label="Eye Y")
                    eye_z = gr.Slider(minimum=1, maximum=400, value=constants.DEFAULT_EYE[2], label="Eye Z (height)")

                with gr.Group():
                    mirror_toggle = gr.Checkbox(value=True, label="Mirrors", info="Off renders every sphere opaque")
                    res_slider = gr.Slider(minimum=64, maximum=512, value=128, step=64, label="Render Resolution", info="Lower for speed")
                    reset_btn = gr.Button("🔄 Reset Scene", variant="secondary")

            with gr.Column(scale=2):
                output_img = gr.Image(label="Viewport", interactive=False, elem_id="output_img")

        inputs = [light_x, light_y, light_z, eye_x, eye_y, eye_z, mirror_toggle, res_slider]

        def reset_view():
            return list(DEFAULT_INPUTS)

        reset_btn.click(fn=reset_view, outputs=inputs)

        for input_comp in inputs:
            input_comp.change(fn=render_frame, inputs=inputs, outputs=output_img,
                              trigger_mode="always_last", show_progress="hidden")

        demo.load(fn=render_frame, inputs=inputs, outputs=output_img, show_progress="hidden")

    return demo


if __name__ == "__main__":
    create_ui().launch(css=CSS)
